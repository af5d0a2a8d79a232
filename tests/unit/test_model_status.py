"""
Unit tests for ModelStatusReporter.
"""

import asyncio
from typing import Any, Dict, Tuple

import httpx
import pytest

from translation_proxy.config.config import ModelAvailability, SystemStatus
from translation_proxy.models.interfaces import InferenceBackend, InferenceReply
from translation_proxy.services.model_registry import ModelRegistry
from translation_proxy.services.model_status import PROBE_FAILURE_MESSAGE, ModelStatusReporter
from tests.conftest import make_descriptor


class ScriptedBackend(InferenceBackend):
    """Backend answering probes from a per-model script."""

    def __init__(self, script: Dict[str, Any]):
        self.script = script
        self.probed = []

    async def infer(self, model_id: str, text: str) -> InferenceReply:
        raise AssertionError("status checks must not translate")

    async def probe(self, model_id: str) -> Tuple[int, Any]:
        self.probed.append(model_id)
        outcome = self.script[model_id]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def two_model_registry():
    return ModelRegistry([
        make_descriptor("model-a", "ar-en"),
        make_descriptor("model-b", "en-ar", specialization=None),
    ])


class TestModelStatusReporter:
    """Test probe isolation and the overall rollup."""

    @pytest.mark.asyncio
    async def test_all_available_is_operational(self, two_model_registry):
        backend = ScriptedBackend({
            "model-a": (200, {"loaded": True}),
            "model-b": (200, {"loaded": False}),
        })

        report = await ModelStatusReporter(two_model_registry, backend).report()

        assert report.status is SystemStatus.OPERATIONAL
        assert [m.status for m in report.models] == [ModelAvailability.AVAILABLE, ModelAvailability.AVAILABLE]
        assert report.models[0].details == {"loaded": True}
        assert report.timestamp is not None
        assert report.timestamp.tzinfo is not None

    @pytest.mark.asyncio
    async def test_failing_probe_is_isolated(self, two_model_registry):
        backend = ScriptedBackend({
            "model-a": ConnectionError("connection refused"),
            "model-b": (200, {"loaded": True}),
        })

        report = await ModelStatusReporter(two_model_registry, backend).report()
        by_id = {m.model_id: m for m in report.models}

        assert by_id["model-a"].status is ModelAvailability.ERROR
        assert by_id["model-a"].error == PROBE_FAILURE_MESSAGE
        assert by_id["model-b"].status is ModelAvailability.AVAILABLE
        assert by_id["model-b"].details == {"loaded": True}
        assert report.status is SystemStatus.ERROR

    @pytest.mark.asyncio
    async def test_non_success_status_marks_model_error(self, two_model_registry):
        backend = ScriptedBackend({
            "model-a": (200, {}),
            "model-b": (404, {"error": "Model not found"}),
        })

        report = await ModelStatusReporter(two_model_registry, backend).report()

        assert report.models[1].status is ModelAvailability.ERROR
        assert report.models[1].details == {"error": "Model not found"}
        assert report.models[1].error is None
        assert report.status is SystemStatus.ERROR

    @pytest.mark.asyncio
    async def test_report_keeps_registry_order_and_metadata(self, two_model_registry):
        backend = ScriptedBackend({"model-a": (200, {}), "model-b": (200, {})})

        report = await ModelStatusReporter(two_model_registry, backend).report()

        assert [m.model_id for m in report.models] == ["model-a", "model-b"]
        assert report.models[0].specialization == "ligature"
        assert report.models[1].specialization is None
        assert report.models[0].supported_pairs == two_model_registry.descriptors[0].supported_pairs

    @pytest.mark.asyncio
    async def test_probes_run_concurrently(self, two_model_registry):
        both_started = asyncio.Event()
        started = []

        class GatedBackend(ScriptedBackend):
            async def probe(self, model_id):
                started.append(model_id)
                if len(started) == 2:
                    both_started.set()
                # Completes only if the other probe starts while this one waits
                await asyncio.wait_for(both_started.wait(), timeout=1)
                return 200, {}

        report = await ModelStatusReporter(two_model_registry, GatedBackend({})).report()

        assert report.status is SystemStatus.OPERATIONAL

    @pytest.mark.asyncio
    async def test_probe_over_http(self, registry, make_client):
        def respond(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("hi-en"):
                return httpx.Response(500, json={"error": "internal"})
            return httpx.Response(200, json={"modelId": request.url.path})

        client, handler = make_client(respond)

        report = await ModelStatusReporter(registry, client).report()

        assert handler.calls == len(registry)
        assert all(r.method == "GET" for r in handler.requests)
        assert report.status is SystemStatus.ERROR
        errored = [m.model_id for m in report.models if not m.is_available]
        assert errored == ["Helsinki-NLP/opus-mt-hi-en"]

    @pytest.mark.asyncio
    async def test_empty_registry_is_operational(self):
        backend = ScriptedBackend({})

        report = await ModelStatusReporter(ModelRegistry([]), backend).report()

        assert report.status is SystemStatus.OPERATIONAL
        assert report.models == []
        assert backend.probed == []

    @pytest.mark.asyncio
    async def test_non_json_body_marks_model_error(self, make_client):
        registry = ModelRegistry([make_descriptor("model-a", "ar-en")])
        client, _ = make_client(lambda request: httpx.Response(200, text="<html>ok</html>"))

        report = await ModelStatusReporter(registry, client).report()

        assert report.models[0].status is ModelAvailability.ERROR
        assert report.models[0].error == PROBE_FAILURE_MESSAGE
        assert report.models[0].details is None
        assert report.status is SystemStatus.ERROR
