"""
System API routes for model status, supported languages and health checks.
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from translation_proxy.api.dependencies import get_model_status_reporter, get_registry
from translation_proxy.api.models import (
    ErrorResponseModel, HealthCheckResponseModel, LanguageModel, LanguagePairModel,
    ModelStatusModel, ModelStatusReportModel, SupportedLanguagesResponseModel
)
from translation_proxy.config.config import LANGUAGE_NAMES, SystemStatus
from translation_proxy.database.connection import db_manager
from translation_proxy.services.model_registry import ModelRegistry
from translation_proxy.services.model_status import ModelStatusReporter
from translation_proxy.utils.logging import api_logger

router = APIRouter(tags=["system"])

API_VERSION = "1.0.0"

# Service start time for uptime calculation
SERVICE_START_TIME = time.time()


@router.get(
    "/model-status",
    response_model=ModelStatusReportModel,
    response_model_exclude_none=True,
    responses={
        500: {"description": "Status check failed"}
    },
    summary="Model availability",
    description="Probe every registered model and report per-model and overall availability."
)
async def model_status(
    reporter: ModelStatusReporter = Depends(get_model_status_reporter)
):
    """Report availability of all registered models."""
    try:
        report = await reporter.report()
    except Exception as e:
        api_logger.error(f"Model status check failed: {str(e)}", event="model_status_failed", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": SystemStatus.ERROR.value,
                "error": "Failed to check model status",
                "timestamp": datetime.now(timezone.utc).isoformat()
            }
        )

    return ModelStatusReportModel(
        status=report.status.value,
        timestamp=report.timestamp,
        models=[
            ModelStatusModel(
                model_id=model.model_id,
                status=model.status.value,
                details=model.details,
                error=model.error,
                supported_language_pairs=[
                    LanguagePairModel(**pair.to_dict()) for pair in model.supported_pairs
                ],
                specialization=model.specialization
            )
            for model in report.models
        ]
    )


@router.get(
    "/languages",
    response_model=SupportedLanguagesResponseModel,
    summary="Supported languages",
    description="Language codes served by registered models."
)
async def supported_languages(
    registry: ModelRegistry = Depends(get_registry)
) -> SupportedLanguagesResponseModel:
    codes = sorted(registry.list_supported_languages())
    pairs = []
    for descriptor in registry.descriptors:
        for pair in descriptor.supported_pairs:
            if pair not in pairs:
                pairs.append(pair)

    return SupportedLanguagesResponseModel(
        languages=[LanguageModel(code=code, name=LANGUAGE_NAMES.get(code, code)) for code in codes],
        pairs=[LanguagePairModel(**pair.to_dict()) for pair in pairs]
    )


@router.get(
    "/health",
    response_model=HealthCheckResponseModel,
    responses={
        503: {"model": ErrorResponseModel, "description": "Service unavailable"}
    },
    summary="Health check",
    description="Check the health status of the service and its database."
)
async def health_check(
    registry: ModelRegistry = Depends(get_registry)
):
    """Perform health check of the service and its dependencies."""
    database_status = "healthy" if await db_manager.health_check() else "unhealthy"
    overall_status = "healthy" if database_status == "healthy" else "degraded"

    health_response = HealthCheckResponseModel(
        status=overall_status,
        timestamp=datetime.now(timezone.utc),
        version=API_VERSION,
        database=database_status,
        registered_models=len(registry),
        uptime_seconds=time.time() - SERVICE_START_TIME
    )

    if overall_status == "degraded":
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=health_response.model_dump(mode="json")
        )

    return health_response
