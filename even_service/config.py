import os

from pydantic import BaseModel, Field

DEFAULT_PORT = "8080"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    port: str = Field(DEFAULT_PORT, description="TCP port to listen on")
    host: str = Field(DEFAULT_HOST, description="Address to bind, all interfaces by default")
    log_level: str = DEFAULT_LOG_LEVEL
    log_json: bool = False


def load_settings() -> Settings:
    # Empty values fall back to the defaults, same as unset ones.
    port = os.getenv("PORT", "").strip() or DEFAULT_PORT
    host = os.getenv("HOST", "").strip() or DEFAULT_HOST
    log_level = os.getenv("LOG_LEVEL", "").strip().upper()
    if log_level not in LOG_LEVELS:
        log_level = DEFAULT_LOG_LEVEL
    log_json = os.getenv("LOG_JSON", "false").strip().lower() == "true"
    return Settings(port=port, host=host, log_level=log_level, log_json=log_json)
