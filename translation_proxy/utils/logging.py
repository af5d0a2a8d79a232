"""
Structured logging utilities for the translation proxy.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from translation_proxy.config.config import config


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured JSON logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "service": getattr(record, 'service', 'translation-proxy'),
            "model_id": getattr(record, 'model_id', None),
            "event": getattr(record, 'event', None) or record.funcName,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        # Add metrics if present
        if getattr(record, 'metrics', None):
            log_entry["metrics"] = record.metrics

        # Add metadata if present
        if getattr(record, 'metadata', None):
            log_entry["metadata"] = record.metadata

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class TranslationLogger:
    """Logger wrapper that attaches structured fields to every record."""

    def __init__(self, name: str, service: str = "translation-proxy"):
        self.logger = logging.getLogger(name)
        self.service = service
        self._setup_logger()

    def _setup_logger(self):
        """Configure logger with structured formatting."""
        if not self.logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(getattr(logging, config.monitoring.log_level.upper(), logging.INFO))

    def _extra(self, model_id: Optional[str], event: Optional[str],
               metrics: Optional[Dict[str, Any]],
               metadata: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return {
            'service': self.service,
            'model_id': model_id,
            'event': event,
            'metrics': metrics,
            'metadata': metadata
        }

    def info(self, message: str, model_id: Optional[str] = None, event: Optional[str] = None,
             metrics: Optional[Dict[str, Any]] = None,
             metadata: Optional[Dict[str, Any]] = None):
        """Log info level message with structured data."""
        self.logger.info(message, extra=self._extra(model_id, event, metrics, metadata))

    def warning(self, message: str, model_id: Optional[str] = None, event: Optional[str] = None,
                metrics: Optional[Dict[str, Any]] = None,
                metadata: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        """Log warning level message with structured data."""
        self.logger.warning(message, extra=self._extra(model_id, event, metrics, metadata), exc_info=exc_info)

    def error(self, message: str, model_id: Optional[str] = None, event: Optional[str] = None,
              metrics: Optional[Dict[str, Any]] = None,
              metadata: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        """Log error level message with structured data."""
        self.logger.error(message, extra=self._extra(model_id, event, metrics, metadata), exc_info=exc_info)

    def debug(self, message: str, model_id: Optional[str] = None, event: Optional[str] = None,
              metrics: Optional[Dict[str, Any]] = None,
              metadata: Optional[Dict[str, Any]] = None):
        """Log debug level message with structured data."""
        self.logger.debug(message, extra=self._extra(model_id, event, metrics, metadata))

    def translation_completed(self, model_id: str, source_lang: str, target_lang: str,
                              processing_time_ms: float, character_count: int,
                              fallback_model: bool, reply_shape: str):
        """Log a successful upstream translation."""
        self.info(
            "Translation completed",
            model_id=model_id,
            event="translation_completed",
            metrics={
                "processing_time_ms": processing_time_ms,
                "character_count": character_count
            },
            metadata={
                "source_language": source_lang,
                "target_language": target_lang,
                "fallback_model": fallback_model,
                "reply_shape": reply_shape
            }
        )

    def translation_failed(self, model_id: str, source_lang: str, target_lang: str,
                           error_message: str, processing_time_ms: float,
                           upstream_status: Optional[int] = None):
        """Log a failed upstream translation."""
        self.error(
            f"Translation failed: {error_message}",
            model_id=model_id,
            event="translation_failed",
            metrics={
                "processing_time_ms": processing_time_ms
            },
            metadata={
                "source_language": source_lang,
                "target_language": target_lang,
                "upstream_status": upstream_status,
                "error_message": error_message
            }
        )

    def probe_failed(self, model_id: str, error_message: str):
        """Log an isolated model probe failure."""
        self.warning(
            f"Model probe failed: {error_message}",
            model_id=model_id,
            event="probe_failed",
            metadata={"error_message": error_message}
        )

    def history_save_failed(self, user_id: str, model_id: str, error_message: str):
        """Log a failed advisory history save."""
        self.warning(
            f"Translation history not saved: {error_message}",
            model_id=model_id,
            event="history_save_failed",
            metadata={
                "user_id": user_id,
                "error_message": error_message
            }
        )

    def preferences_save_failed(self, user_id: str, model_id: str, error_message: str):
        """Log a failed update of the user's remembered languages."""
        self.warning(
            f"Preferred languages not updated: {error_message}",
            model_id=model_id,
            event="preferences_save_failed",
            metadata={
                "user_id": user_id,
                "error_message": error_message
            }
        )


# Global logger instances
api_logger = TranslationLogger("api", "api-gateway")
proxy_logger = TranslationLogger("proxy", "translation-proxy")
status_logger = TranslationLogger("status", "model-status")
