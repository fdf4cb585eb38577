# health_dashboard/config.py
import os
import re
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {"": "seconds", "s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def parse_duration(value, default=timedelta(days=7)):
    """Parse '7d', '12h', '30m', '45s' or a bare number of seconds."""
    if value is None or value == "":
        return default
    match = _DURATION_RE.match(str(value).lower())
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})


def _env_bool(name, default):
    return os.getenv(name, str(default)).lower() in ("1", "true", "yes")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-change-in-production")

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///health_dashboard.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    DB_CONNECT_RETRIES = int(os.getenv("DB_CONNECT_RETRIES", "5"))
    DB_CONNECT_RETRY_DELAY = float(os.getenv("DB_CONNECT_RETRY_DELAY", "5"))
    DB_CREATE_ALL = _env_bool("DB_CREATE_ALL", True)

    JWT_SECRET_KEY = os.getenv("JWT_SECRET", "your-secret-key-change-in-production")
    JWT_ACCESS_TOKEN_EXPIRES = parse_duration(os.getenv("JWT_EXPIRES_IN", "7d"))

    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
        if origin.strip()
    ]

    # AI backend. AI_API_KEY is reserved for hosted backends; Bedrock uses the AWS credential chain.
    AI_BACKEND = os.getenv("AI_BACKEND", "mock")
    AI_API_KEY = os.getenv("AI_API_KEY")
    AWS_REGION = os.getenv("AWS_REGION", "us-east-1")
    BEDROCK_MODEL_ID = os.getenv("BEDROCK_MODEL_ID", "amazon.titan-text-premier-v1:0")
    AI_TEMPERATURE = float(os.getenv("AI_TEMPERATURE", "0.3"))
    AI_MAX_TOKENS = int(os.getenv("AI_MAX_TOKENS", "2048"))

    REPORT_TEMP_DIR = os.getenv("REPORT_TEMP_DIR", os.path.join(os.getcwd(), "temp"))
    REPORT_CLEANUP_DELAY = float(os.getenv("REPORT_CLEANUP_DELAY", "5"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    DB_CONNECT_RETRIES = 1
    DB_CONNECT_RETRY_DELAY = 0
    DB_CREATE_ALL = True
    JWT_SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    AI_BACKEND = "mock"
    REPORT_CLEANUP_DELAY = 0
