# health_dashboard/utils/ai_prompts.py
"""Prompt templates for the health assistant and keyword-based chat categories."""
import json


def _dump(value):
    return json.dumps(value, indent=2, default=str)


def health_advice_prompt(metrics):
    return f"""
You are an expert preventive health AI assistant. Analyze these health metrics:
{_dump(metrics)}

Provide preventive health suggestions and a risk level (0-100) as JSON:
{{
  "advice": "Detailed preventive health advice based on the metrics",
  "riskScore": <number between 0-100>,
  "recommendations": ["Specific recommendation 1", "Specific recommendation 2"],
  "alerts": [{{"type": "warning|info|critical", "message": "Alert message"}}],
  "trend": "improving|stable|declining"
}}

Risk Score Guidelines:
- 0-30: Low risk, healthy metrics
- 31-60: Moderate risk, some areas need attention
- 61-80: High risk, immediate attention recommended
- 81-100: Critical risk, consult healthcare provider

Be specific, actionable, and empathetic in your response.
"""


def chat_prompt(query, context=None):
    context_str = _dump(context) if context else "No specific health data available"
    return f"""
You are a friendly and knowledgeable preventive health AI assistant. The user is asking: "{query}"

User Context:
{context_str}

Provide a helpful, accurate, and empathetic response. If the question is about specific health
conditions, always recommend consulting with a healthcare professional for personalized medical advice.

Keep responses concise (2-3 paragraphs max) and actionable.
"""


def risk_prediction_prompt(history):
    return f"""
Analyze the following historical health metrics and predict potential health risks.

Historical Data:
{_dump(history)}

Provide a risk prediction in JSON format:
{{
  "overallRiskScore": <number 0-100>,
  "riskFactors": [{{"factor": "Factor name", "severity": "low|medium|high", "description": "Why this is a risk"}}],
  "predictions": {{"nextWeek": "Prediction for next week", "nextMonth": "Prediction for next month"}},
  "preventiveActions": ["Action 1", "Action 2"]
}}
"""


def report_summary_prompt(metrics, insights):
    return f"""
Generate a comprehensive health report summary based on the following data:

Health Metrics:
{_dump(metrics)}

AI Insights:
{_dump(insights)}

Create a professional health report summary that includes:
1. Executive summary
2. Key metrics overview
3. Risk assessment
4. Recommendations
5. Action items

Format as a structured text report suitable for PDF export.
"""


CHAT_CATEGORIES = (
    ("nutrition", ("diet", "food", "nutrition")),
    ("exercise", ("exercise", "workout", "activity")),
    ("preventive", ("prevention", "risk")),
    ("diagnostic", ("symptom", "diagnosis")),
    ("lifestyle", ("lifestyle", "habit")),
)


def get_chat_category(query):
    lowered = query.lower()
    for category, keywords in CHAT_CATEGORIES:
        if any(word in lowered for word in keywords):
            return category
    return "general"
