"""
Core data types and abstract interfaces for the translation proxy.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from translation_proxy.config.config import ModelAvailability, SystemStatus


@dataclass(frozen=True)
class LanguagePair:
    """Ordered (source, target) pair of language codes."""
    source: str
    target: str

    @classmethod
    def parse(cls, value: str) -> "LanguagePair":
        """Parse a "src-tgt" string such as "en-ar"."""
        parts = value.split("-")
        if len(parts) != 2 or not all(parts):
            raise ValueError(f"Invalid language pair: {value!r}")
        return cls(source=parts[0], target=parts[1])

    def to_dict(self) -> Dict[str, str]:
        return {"source": self.source, "target": self.target}


@dataclass(frozen=True)
class ModelDescriptor:
    """Registry entry for one hosted translation model."""
    model_id: str
    supported_pairs: Tuple[LanguagePair, ...]
    specialization: Optional[str] = None
    version: str = "1.0"
    max_tokens: int = 512

    def __post_init__(self):
        # Keep declaration order but drop repeated pairs.
        object.__setattr__(self, "supported_pairs", tuple(dict.fromkeys(self.supported_pairs)))

    @classmethod
    def from_config(cls, entry: Dict[str, Any]) -> "ModelDescriptor":
        return cls(
            model_id=entry["model_id"],
            supported_pairs=tuple(LanguagePair.parse(pair) for pair in entry.get("language_pairs", [])),
            specialization=entry.get("specialization"),
            version=entry.get("version", "1.0"),
            max_tokens=int(entry.get("max_tokens", 512))
        )

    def supports(self, source_lang: str, target_lang: str) -> bool:
        return LanguagePair(source_lang, target_lang) in self.supported_pairs

    @property
    def languages(self) -> FrozenSet[str]:
        codes = set()
        for pair in self.supported_pairs:
            codes.add(pair.source)
            codes.add(pair.target)
        return frozenset(codes)


@dataclass
class TranslationRequest:
    """A single translation request."""
    source_text: Optional[str]
    source_lang: Optional[str]
    target_lang: Optional[str]


@dataclass
class TranslationResult:
    """Normalized translation outcome."""
    translated_text: str
    model_used: str


class ReplyShape(Enum):
    SEQUENCE = "sequence"
    OBJECT = "object"


@dataclass
class InferenceReply:
    """Success payload from the inference endpoint.

    The endpoint answers either with a list of ``{"translation_text": ...}``
    objects or with a single ``{"generated_text": ...}`` object. Both shapes
    occur in practice, so the shape is recorded explicitly instead of guessed.
    """
    shape: ReplyShape
    payload: Any

    @classmethod
    def from_payload(cls, payload: Any) -> "InferenceReply":
        if isinstance(payload, list):
            return cls(ReplyShape.SEQUENCE, payload)
        if isinstance(payload, dict):
            return cls(ReplyShape.OBJECT, payload)
        raise ValueError(f"Unexpected inference payload type: {type(payload).__name__}")

    @property
    def text(self) -> str:
        if self.shape is ReplyShape.SEQUENCE:
            if not self.payload or not isinstance(self.payload[0], dict):
                raise ValueError("Inference reply sequence is empty")
            value = self.payload[0].get("translation_text")
            field_name = "translation_text"
        else:
            value = self.payload.get("generated_text")
            field_name = "generated_text"

        if not isinstance(value, str):
            raise ValueError(f"Inference reply is missing '{field_name}'")
        return value


@dataclass
class ModelStatus:
    """Availability of one registered model."""
    model_id: str
    status: ModelAvailability
    supported_pairs: Tuple[LanguagePair, ...]
    specialization: Optional[str] = None
    details: Any = None
    error: Optional[str] = None

    @property
    def is_available(self) -> bool:
        return self.status is ModelAvailability.AVAILABLE


@dataclass
class StatusReport:
    """Aggregate availability of every registered model."""
    status: SystemStatus
    models: List[ModelStatus] = field(default_factory=list)
    timestamp: datetime = None


class InferenceBackend(ABC):
    """Interface for the remote inference endpoint."""

    @abstractmethod
    async def infer(self, model_id: str, text: str) -> InferenceReply:
        """Run one translation on the named model."""
        pass

    @abstractmethod
    async def probe(self, model_id: str) -> Tuple[int, Any]:
        """Fetch a model's status without translating; returns (HTTP status, body)."""
        pass
