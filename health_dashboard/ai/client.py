# health_dashboard/ai/client.py
"""
Health AI client.

Builds prompts from metrics or chat queries and hands them to an inference
backend. The backend is created lazily on first use; if the configured one
cannot be constructed the client falls back to ``MockBackend`` so callers keep
working. Failures of the backend call itself surface as ``AIClientError``.
"""
import json
import logging
import threading

from health_dashboard.ai.backends import (
    TASK_ADVICE, TASK_CHAT, TASK_RISK, TASK_SUMMARY, BedrockBackend, MockBackend,
)
from health_dashboard.utils import ai_prompts

logger = logging.getLogger(__name__)


class AIClientError(Exception):
    pass


def extract_json(output):
    """Return the first JSON object embedded in ``output`` (dicts pass through)."""
    if isinstance(output, dict):
        return output
    if not isinstance(output, str):
        raise ValueError(f"Unexpected backend output type: {type(output).__name__}")

    decoder = json.JSONDecoder()
    start = output.find("{")
    while start != -1:
        try:
            value, _ = decoder.raw_decode(output, start)
        except json.JSONDecodeError:
            start = output.find("{", start + 1)
            continue
        if isinstance(value, dict):
            return value
        start = output.find("{", start + 1)
    raise ValueError("No JSON object found in backend output")


class HealthAIClient:
    def __init__(self, app=None, backend=None):
        self.backend = backend
        self.initialized = backend is not None
        self._settings = {"AI_BACKEND": "mock"}
        self._lock = threading.Lock()
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        if self.initialized:
            self.close()
        self._settings = {
            key: app.config.get(key)
            for key in ("AI_BACKEND", "AWS_REGION", "BEDROCK_MODEL_ID", "AI_TEMPERATURE", "AI_MAX_TOKENS")
        }
        app.extensions["health_ai"] = self

    @property
    def backend_name(self):
        return self.backend.name if self.backend is not None else None

    @property
    def is_mock(self):
        return isinstance(self.backend, MockBackend)

    def _create_backend(self):
        kind = (self._settings.get("AI_BACKEND") or "mock").lower()
        if kind == "bedrock":
            kwargs = {"region_name": self._settings.get("AWS_REGION") or "us-east-1"}
            if self._settings.get("BEDROCK_MODEL_ID"):
                kwargs["model_id"] = self._settings["BEDROCK_MODEL_ID"]
            if self._settings.get("AI_TEMPERATURE") is not None:
                kwargs["temperature"] = self._settings["AI_TEMPERATURE"]
            if self._settings.get("AI_MAX_TOKENS") is not None:
                kwargs["max_tokens"] = self._settings["AI_MAX_TOKENS"]
            return BedrockBackend(**kwargs)
        if kind != "mock":
            logger.warning("Unknown AI_BACKEND %r, using mock backend", kind)
        return MockBackend()

    def initialize(self):
        """Create the backend once; safe to call repeatedly and from several threads."""
        if self.initialized:
            return self.backend
        with self._lock:
            if self.initialized:
                return self.backend
            try:
                self.backend = self._create_backend()
                logger.info("AI backend initialized: %s", self.backend.name)
            except Exception:
                logger.exception("Failed to initialize AI backend, falling back to mock")
                self.backend = MockBackend()
            self.initialized = True
        return self.backend

    def close(self):
        with self._lock:
            if self.backend is not None:
                self.backend.close()
            self.backend = None
            self.initialized = False

    def _generate(self, prompt, task, structured, failure_message):
        backend = self.initialize()
        try:
            output = backend.generate(prompt, task=task, structured=structured)
            if structured:
                return extract_json(output)
            return output if isinstance(output, str) else json.dumps(output)
        except Exception as exc:
            logger.error("%s: %s", failure_message, exc)
            raise AIClientError(failure_message) from exc

    def generate_health_advice(self, metrics):
        return self._generate(
            ai_prompts.health_advice_prompt(metrics), TASK_ADVICE, True,
            "Failed to generate health advice",
        )

    def chat(self, query, context=None):
        return self._generate(
            ai_prompts.chat_prompt(query, context), TASK_CHAT, False,
            "Failed to process chat request",
        )

    def predict_risk(self, history):
        return self._generate(
            ai_prompts.risk_prediction_prompt(history), TASK_RISK, True,
            "Failed to predict health risks",
        )

    def summarize_report(self, metrics, insights):
        return self._generate(
            ai_prompts.report_summary_prompt(metrics, insights), TASK_SUMMARY, False,
            "Failed to summarize health report",
        )
