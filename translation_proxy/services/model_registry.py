"""
In-memory registry of hosted translation models.
"""

from typing import Any, Dict, FrozenSet, Iterable, Optional, Sequence, Tuple

from translation_proxy.config.config import config
from translation_proxy.models.interfaces import ModelDescriptor
from translation_proxy.utils.exceptions import ConfigurationError


class ModelRegistry:
    """Read-only table of model descriptors.

    Declaration order is lookup priority: when several descriptors serve the
    same pair, ``lookup`` returns the one declared first.
    """

    def __init__(self, descriptors: Iterable[ModelDescriptor], fallback_prefix: str = "Helsinki-NLP/opus-mt"):
        self._descriptors: Tuple[ModelDescriptor, ...] = tuple(descriptors)
        self.fallback_prefix = fallback_prefix

    @classmethod
    def from_config(cls, model_configs: Sequence[Dict[str, Any]], fallback_prefix: str) -> "ModelRegistry":
        """Build the registry from the static model table."""
        descriptors = []
        for index, entry in enumerate(model_configs):
            try:
                descriptors.append(ModelDescriptor.from_config(entry))
            except (KeyError, TypeError, ValueError) as e:
                raise ConfigurationError(
                    f"Invalid model table entry {index}: {e}",
                    config_key="model_configs",
                    details={"entry": entry}
                ) from e
        return cls(descriptors, fallback_prefix=fallback_prefix)

    @property
    def descriptors(self) -> Tuple[ModelDescriptor, ...]:
        return self._descriptors

    def lookup(self, source_lang: str, target_lang: str) -> Optional[ModelDescriptor]:
        """Return the first descriptor serving the exact (source, target) pair, or None."""
        for descriptor in self._descriptors:
            if descriptor.supports(source_lang, target_lang):
                return descriptor
        return None

    def fallback_model_id(self, source_lang: str, target_lang: str) -> str:
        return f"{self.fallback_prefix}-{source_lang}-{target_lang}"

    def resolve_model_id(self, source_lang: str, target_lang: str) -> str:
        """Model name to call for a pair; unregistered pairs get the conventional name."""
        descriptor = self.lookup(source_lang, target_lang)
        if descriptor is not None:
            return descriptor.model_id
        return self.fallback_model_id(source_lang, target_lang)

    def list_supported_languages(self) -> FrozenSet[str]:
        """Every code that appears on either side of any registered pair."""
        codes = set()
        for descriptor in self._descriptors:
            codes.update(descriptor.languages)
        return frozenset(codes)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self):
        return iter(self._descriptors)


# Loaded once at import time from static configuration.
model_registry = ModelRegistry.from_config(
    config.inference.model_configs,
    fallback_prefix=config.inference.fallback_model_prefix
)


def get_model_registry() -> ModelRegistry:
    return model_registry
