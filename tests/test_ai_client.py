"""
Tests for the health AI client: backend selection, fallback, output parsing
and error wrapping.
"""
import io
import json
from unittest.mock import MagicMock, patch

import pytest

from health_dashboard.ai import AIClientError, BedrockBackend, HealthAIClient, MockBackend, extract_json


class StubBackend:
    name = "stub"

    def __init__(self, output):
        self.output = output
        self.calls = []

    def generate(self, prompt, task="chat", structured=False):
        self.calls.append((prompt, task, structured))
        return self.output

    def close(self):
        pass


class TestInitialization:
    def test_defaults_to_mock_backend(self):
        client = HealthAIClient()
        client.initialize()
        assert client.is_mock
        assert client.backend_name == "mock"

    def test_initialize_is_idempotent(self):
        client = HealthAIClient()
        first = client.initialize()
        assert client.initialize() is first

    def test_unknown_backend_uses_mock(self):
        client = HealthAIClient()
        client._settings = {"AI_BACKEND": "something-else"}
        client.initialize()
        assert client.is_mock

    def test_falls_back_to_mock_when_bedrock_cannot_start(self):
        client = HealthAIClient()
        client._settings = {"AI_BACKEND": "bedrock", "AWS_REGION": "us-east-1"}
        with patch("health_dashboard.ai.backends.boto3.client", side_effect=RuntimeError("no credentials")):
            client.initialize()
        assert client.is_mock

    def test_bedrock_backend_selected_when_configured(self):
        client = HealthAIClient()
        client._settings = {"AI_BACKEND": "bedrock", "AWS_REGION": "eu-west-1", "BEDROCK_MODEL_ID": "model-x"}
        with patch("health_dashboard.ai.backends.boto3.client") as boto_client:
            client.initialize()
        boto_client.assert_called_once_with("bedrock-runtime", region_name="eu-west-1")
        assert client.backend_name == "bedrock"
        assert client.backend.model_id == "model-x"

    def test_close_resets_state(self):
        client = HealthAIClient()
        client.initialize()
        client.close()
        assert client.backend is None
        assert not client.initialized


class TestOperations:
    def test_mock_health_advice_shape(self):
        advice = HealthAIClient().generate_health_advice({"heartRate": 70})
        assert set(advice) == {"advice", "riskScore", "recommendations", "alerts", "trend"}
        assert 20 <= advice["riskScore"] < 60

    def test_mock_risk_prediction_shape(self):
        prediction = HealthAIClient().predict_risk([{"heartRate": 70}])
        assert 30 <= prediction["overallRiskScore"] < 60
        assert "preventiveActions" in prediction

    def test_chat_returns_text_and_embeds_query(self):
        backend = StubBackend("Drink water.")
        client = HealthAIClient(backend=backend)
        assert client.chat("How much water?", {"recentMetrics": []}) == "Drink water."
        prompt, task, structured = backend.calls[0]
        assert '"How much water?"' in prompt
        assert task == "chat"
        assert structured is False

    def test_chat_without_context_mentions_missing_data(self):
        backend = StubBackend("ok")
        HealthAIClient(backend=backend).chat("hello")
        assert "No specific health data available" in backend.calls[0][0]

    def test_structured_output_is_parsed_from_text(self):
        backend = StubBackend('Here you go:\n{"advice": "Walk more", "riskScore": 40}\nThanks')
        advice = HealthAIClient(backend=backend).generate_health_advice({"steps": 2000})
        assert advice == {"advice": "Walk more", "riskScore": 40}

    def test_unparseable_structured_output_raises(self):
        client = HealthAIClient(backend=StubBackend("no json here"))
        with pytest.raises(AIClientError, match="Failed to predict health risks"):
            client.predict_risk([])

    def test_backend_exception_is_wrapped(self):
        backend = MagicMock()
        backend.generate.side_effect = RuntimeError("boom")
        client = HealthAIClient(backend=backend)
        with pytest.raises(AIClientError, match="Failed to process chat request") as excinfo:
            client.chat("hi")
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    def test_summarize_report_uses_mock_text(self):
        summary = HealthAIClient(backend=MockBackend()).summarize_report([], [])
        assert isinstance(summary, str) and summary


def test_extract_json_skips_non_object_braces():
    assert extract_json("{not json} then {\"a\": 1}") == {"a": 1}


def test_extract_json_passes_dicts_through():
    payload = {"a": 1}
    assert extract_json(payload) is payload


def test_bedrock_backend_sends_titan_request():
    boto_client = MagicMock()
    boto_client.invoke_model.return_value = {
        "body": io.BytesIO(json.dumps({"results": [{"outputText": "hello"}]}).encode()),
    }
    backend = BedrockBackend(client=boto_client, model_id="titan", temperature=0.4, max_tokens=256)

    assert backend.generate("prompt text", structured=True) == "hello"

    kwargs = boto_client.invoke_model.call_args.kwargs
    body = json.loads(kwargs["body"])
    assert kwargs["modelId"] == "titan"
    assert body["inputText"] == "prompt text"
    assert body["textGenerationConfig"]["maxTokenCount"] == 256
    assert body["textGenerationConfig"]["temperature"] == 0.1
