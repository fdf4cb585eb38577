from .backends import BedrockBackend, MockBackend
from .client import AIClientError, HealthAIClient, extract_json
