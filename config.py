"""
Transcriber Configuration
Supports AWS Parameter Store for production secrets
"""
import os
import tempfile
from functools import lru_cache

import boto3
from dotenv import load_dotenv

# Shared .env first, then .env.local overrides for local development
load_dotenv(".env")
load_dotenv(".env.local", override=True)


def get_parameter(name: str, default: str = "") -> str:
    """Get parameter from AWS Parameter Store or environment"""
    # Environment variable takes precedence
    env_key = name.upper().replace("-", "_").replace("/", "_")
    if env_key in os.environ:
        return os.environ[env_key]

    if os.environ.get("USE_PARAMETER_STORE"):
        ssm = boto3.client("ssm", region_name=os.environ.get("AWS_REGION", "us-east-1"))
        path = os.environ.get("PARAMETER_STORE_PATH", "/transcriber/prod/")
        try:
            response = ssm.get_parameter(Name=f"{path}{name}", WithDecryption=True)
        except ssm.exceptions.ParameterNotFound:
            return default
        return response["Parameter"]["Value"]

    return default


def _env_int(name: str, default: int) -> int:
    raw = (os.environ.get(name) or "").strip()
    return int(raw) if raw else default


def _env_list(name: str, default: str) -> frozenset:
    raw = os.environ.get(name, default)
    return frozenset(p.strip().lower().lstrip(".") for p in raw.split(",") if p.strip())


class Config:
    """Base configuration"""
    # Flask
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-in-production")
    DEBUG = False
    TESTING = False

    # Auth
    API_TOKENS = os.environ.get("API_TOKENS", "")
    API_TOKENS_FILE = os.environ.get("API_TOKENS_FILE", "")

    # AWS
    AWS_REGION = os.environ.get("AWS_REGION", "us-east-1")
    AWS_S3_BUCKET = os.environ.get("AWS_S3_BUCKET", "312-transcriptions")
    S3_KEY_PREFIX = os.environ.get("S3_KEY_PREFIX", "transcriptions/")

    # Transcribe
    TRANSCRIBE_LANGUAGE_CODE = os.environ.get("TRANSCRIBE_LANGUAGE_CODE", "en-US")
    TRANSCRIBE_MEDIA_FORMAT = os.environ.get("TRANSCRIBE_MEDIA_FORMAT", "mp3")
    SUBTITLE_FORMAT = os.environ.get("SUBTITLE_FORMAT", "srt")
    SUBTITLE_OUTPUT_START_INDEX = _env_int("SUBTITLE_OUTPUT_START_INDEX", 1)
    TRANSCRIPT_NOT_FOUND_STATUS = _env_int("TRANSCRIPT_NOT_FOUND_STATUS", 420)

    # File uploads
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER") or os.path.join(tempfile.gettempdir(), "transcribe_uploads")
    ALLOWED_EXTENSIONS = _env_list("ALLOWED_EXTENSIONS", "mp3")
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024  # 10MB

    # Duration probing
    MAX_AUDIO_SECONDS = _env_int("MAX_AUDIO_SECONDS", 60)
    FFPROBE_BIN = os.environ.get("FFPROBE_BIN", "ffprobe")
    FFPROBE_TIMEOUT = _env_int("FFPROBE_TIMEOUT", 30)

    # Rate Limiting
    # One budget per client address shared by every non-exempt route
    RATELIMIT_APPLICATION = os.environ.get("RATELIMIT_APPLICATION", "20 per 10 minutes")
    RATELIMIT_STRATEGY = "moving-window"
    RATELIMIT_STORAGE_URI = os.environ.get("REDIS_URL", "memory://")
    RATELIMIT_HEADERS_ENABLED = True

    # Monitoring
    SENTRY_DSN = os.environ.get("SENTRY_DSN", "")
    UMAMI_WEBSITE_ID = os.environ.get("UMAMI_WEBSITE_ID", "")
    UMAMI_HOST_URL = os.environ.get("UMAMI_HOST_URL", "https://cloud.umami.is")

    # Logging
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")
    LOG_DIR = os.environ.get("LOG_DIR", "")

    # App Version
    APP_VERSION = os.environ.get("APP_VERSION", "2026.10")
    BUILD_TIME = os.environ.get("BUILD_TIME", "")
    GIT_COMMIT = os.environ.get("GIT_COMMIT", "")


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Override with Parameter Store in production
    SECRET_KEY = get_parameter("secret-key", Config.SECRET_KEY)
    API_TOKENS = get_parameter("api-tokens", Config.API_TOKENS)
    SENTRY_DSN = get_parameter("sentry-dsn", Config.SENTRY_DSN)


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = True
    TESTING = True
    API_TOKENS = "test-token:tester"
    API_TOKENS_FILE = ""
    AWS_S3_BUCKET = "test-bucket"
    RATELIMIT_STORAGE_URI = "memory://"
    SENTRY_DSN = ""
    UMAMI_WEBSITE_ID = ""
    LOG_DIR = ""


config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}


@lru_cache()
def get_config(env: str = None):
    """Get configuration by environment name"""
    env = env or os.environ.get("FLASK_ENV", "development")
    return config.get(env, config["default"])
