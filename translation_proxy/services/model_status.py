"""
Availability report for every registered model.
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional

from translation_proxy.config.config import ModelAvailability, SystemStatus
from translation_proxy.models.interfaces import (
    InferenceBackend, ModelDescriptor, ModelStatus, StatusReport
)
from translation_proxy.services.inference_client import get_inference_client
from translation_proxy.services.model_registry import ModelRegistry, get_model_registry
from translation_proxy.utils.exceptions import ProbeError
from translation_proxy.utils.logging import status_logger as logger

PROBE_FAILURE_MESSAGE = "Failed to fetch model status"


class ModelStatusReporter:
    """Probes each registered model and rolls the results up.

    Probes run concurrently and are isolated: one failing probe only marks
    its own model as errored. The overall status is ``error`` as soon as any
    model errored.
    """

    def __init__(self, registry: Optional[ModelRegistry] = None,
                 backend: Optional[InferenceBackend] = None):
        self.registry = registry if registry is not None else get_model_registry()
        self.backend = backend if backend is not None else get_inference_client()

    async def _fetch(self, descriptor: ModelDescriptor):
        try:
            return await self.backend.probe(descriptor.model_id)
        except Exception as e:
            raise ProbeError(descriptor.model_id, details={"reason": str(e)}) from e

    async def probe(self, descriptor: ModelDescriptor) -> ModelStatus:
        """Check one model; never raises."""
        try:
            status_code, body = await self._fetch(descriptor)
        except ProbeError as e:
            logger.probe_failed(descriptor.model_id, str(e.details.get("reason")))
            return ModelStatus(
                model_id=descriptor.model_id,
                status=ModelAvailability.ERROR,
                supported_pairs=descriptor.supported_pairs,
                specialization=descriptor.specialization,
                error=PROBE_FAILURE_MESSAGE
            )

        availability = ModelAvailability.AVAILABLE if 200 <= status_code < 300 else ModelAvailability.ERROR
        return ModelStatus(
            model_id=descriptor.model_id,
            status=availability,
            supported_pairs=descriptor.supported_pairs,
            specialization=descriptor.specialization,
            details=body
        )

    async def report(self) -> StatusReport:
        """Probe all models concurrently and build the rollup."""
        statuses = await asyncio.gather(*(self.probe(descriptor) for descriptor in self.registry.descriptors))

        overall = SystemStatus.OPERATIONAL
        if any(not status.is_available for status in statuses):
            overall = SystemStatus.ERROR

        logger.info(
            f"Model status checked: {overall.value}",
            event="model_status_report",
            metrics={
                "models": len(statuses),
                "unavailable": sum(1 for status in statuses if not status.is_available)
            }
        )

        return StatusReport(
            status=overall,
            models=list(statuses),
            timestamp=datetime.now(timezone.utc)
        )
