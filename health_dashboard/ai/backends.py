# health_dashboard/ai/backends.py
"""
Inference backends behind the health AI client.

Each backend exposes ``generate(prompt, task, structured)`` and returns either
text or, for structured tasks, a dict or a JSON-bearing string.
"""
import json
import random

import boto3

TASK_ADVICE = "advice"
TASK_CHAT = "chat"
TASK_RISK = "risk"
TASK_SUMMARY = "summary"


class BedrockBackend:
    """Amazon Bedrock text model (Titan request/response format)."""

    name = "bedrock"

    def __init__(self, region_name="us-east-1", model_id="amazon.titan-text-premier-v1:0",
                 temperature=0.3, max_tokens=2048, top_p=0.9, client=None):
        self.client = client or boto3.client("bedrock-runtime", region_name=region_name)
        self.model_id = model_id
        self.default_temperature = temperature
        self.max_tokens = max_tokens
        self.top_p = top_p

    def _temperature_for(self, structured):
        # structured output: low temperature
        return 0.1 if structured else self.default_temperature

    def generate(self, prompt, task=TASK_CHAT, structured=False):
        body = {
            "inputText": prompt,
            "textGenerationConfig": {
                "maxTokenCount": self.max_tokens,
                "temperature": self._temperature_for(structured),
                "topP": self.top_p,
                "stopSequences": [],
            },
        }
        response = self.client.invoke_model(
            modelId=self.model_id,
            body=json.dumps(body),
            contentType="application/json",
        )
        response_body = json.loads(response["body"].read())
        return response_body["results"][0]["outputText"]

    def close(self):
        close = getattr(self.client, "close", None)
        if close:
            close()


class MockBackend:
    """Canned responses for development and for running without AI credentials."""

    name = "mock"

    def __init__(self, rng=None):
        self._rng = rng or random.Random()

    def generate(self, prompt, task=TASK_CHAT, structured=False):
        if task == TASK_ADVICE:
            return {
                "advice": (
                    "Based on your health metrics, you're maintaining a generally healthy lifestyle. "
                    "Continue monitoring your heart rate and ensure you get adequate sleep. "
                    "Consider increasing daily steps to reach 10,000 for optimal cardiovascular health."
                ),
                "riskScore": self._rng.randint(20, 59),
                "recommendations": [
                    "Maintain regular exercise routine",
                    "Ensure 7-9 hours of sleep nightly",
                    "Monitor blood sugar levels regularly",
                ],
                "alerts": [],
                "trend": "stable",
            }
        if task == TASK_RISK:
            return {
                "overallRiskScore": self._rng.randint(30, 59),
                "riskFactors": [
                    {
                        "factor": "Physical Activity",
                        "severity": "medium",
                        "description": "Step count is below recommended levels",
                    }
                ],
                "predictions": {
                    "nextWeek": "Metrics expected to remain stable with current routine",
                    "nextMonth": "Consider increasing physical activity to improve cardiovascular health",
                },
                "preventiveActions": [
                    "Aim for 10,000 steps daily",
                    "Maintain consistent sleep schedule",
                ],
            }
        if task == TASK_SUMMARY:
            return (
                "Your readings over this period are broadly within healthy ranges. "
                "Keep a consistent sleep schedule, stay active every day and review any flagged "
                "readings with a healthcare professional."
            )
        return (
            "I'm here to help with your preventive health questions. Based on your query, I recommend "
            "maintaining a balanced diet, regular exercise, and adequate sleep. For specific medical "
            "concerns, please consult with a healthcare professional."
        )

    def close(self):
        pass
