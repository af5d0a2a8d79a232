"""
HTTP client for the hosted inference API.
"""

import json
from typing import Any, Optional, Tuple

import httpx

from translation_proxy.config.config import InferenceConfig, config
from translation_proxy.models.interfaces import InferenceBackend, InferenceReply
from translation_proxy.utils.exceptions import UpstreamError
from translation_proxy.utils.logging import TranslationLogger

logger = TranslationLogger(__name__, "inference-client")


def _decode_body(response: httpx.Response) -> Any:
    """JSON body when parseable, otherwise the raw text."""
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


class HuggingFaceInferenceClient(InferenceBackend):
    """Client for the hosted inference endpoint, one model per URL path."""

    def __init__(self, inference_config: Optional[InferenceConfig] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = inference_config or config.inference
        self.transport = transport
        self.http_client: Optional[httpx.AsyncClient] = None

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get HTTP client for inference requests."""
        if not self.http_client:
            self.http_client = httpx.AsyncClient(
                base_url=self.settings.api_base_url,
                headers={"Authorization": f"Bearer {self.settings.api_key}"},
                timeout=httpx.Timeout(self.settings.request_timeout_seconds),
                transport=self.transport
            )
        return self.http_client

    async def close(self):
        if self.http_client:
            await self.http_client.aclose()
            self.http_client = None

    def _model_path(self, model_id: str) -> str:
        return f"/models/{model_id}"

    async def infer(self, model_id: str, text: str) -> InferenceReply:
        """Send one translation request; a single attempt, no retries."""
        client = await self._get_http_client()
        body = {
            "inputs": text,
            "options": {
                "wait_for_model": self.settings.wait_for_model,
                "use_cache": self.settings.use_cache
            }
        }

        try:
            response = await client.post(self._model_path(model_id), json=body)
        except httpx.TimeoutException as e:
            raise UpstreamError(
                "Translation request timed out",
                model_id=model_id,
                details={"timeout_seconds": self.settings.request_timeout_seconds}
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError(
                "Translation request failed",
                model_id=model_id,
                details={"reason": str(e)}
            ) from e

        if not response.is_success:
            raise UpstreamError(
                "Translation failed",
                model_id=model_id,
                status_code=response.status_code,
                details=_decode_body(response)
            )

        try:
            payload = response.json()
            return InferenceReply.from_payload(payload)
        except (json.JSONDecodeError, UnicodeDecodeError, ValueError) as e:
            raise UpstreamError(
                "Malformed translation response",
                model_id=model_id,
                status_code=response.status_code,
                details={"reason": str(e)}
            ) from e

    async def probe(self, model_id: str) -> Tuple[int, Any]:
        """Fetch model metadata as an availability check.

        The body must be JSON whatever the status; a non-JSON body raises
        ``json.JSONDecodeError`` and counts as a failed check.
        """
        client = await self._get_http_client()
        response = await client.get(
            self._model_path(model_id),
            timeout=httpx.Timeout(self.settings.probe_timeout_seconds)
        )
        logger.debug(
            f"Probe answered {response.status_code}",
            model_id=model_id,
            event="probe_response",
            metrics={"status_code": response.status_code}
        )
        return response.status_code, response.json()


inference_client = HuggingFaceInferenceClient()


def get_inference_client() -> HuggingFaceInferenceClient:
    return inference_client
