from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from clawmark.exceptions import ClawMarkConfigurationError
from clawmark.utils.config_manager import ConfigManager


class ClawMarkSettings(BaseModel):
    """Resolved configuration view for the ClawMark service."""

    platform_api_url: str = Field(default="https://www.moltbook.com/api/v1")
    platform_api_key: Optional[str] = Field(default=None, description="Bearer credential for the platform API")
    platform_timeout_seconds: float = Field(default=10.0, gt=0)
    posts_page_size: int = Field(default=5, ge=1)

    challenge_ttl_seconds: int = Field(default=15 * 60, ge=1)
    challenge_namespace: str = Field(default="clawmark-verify")
    cleanup_interval_minutes: int = Field(default=5, ge=0, description="0 disables the sweep")

    allowed_origins: List[str] = Field(default_factory=lambda: ["*"])
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    environment: str = Field(default="production", description="\"development\" adds exception messages to 500 responses")
    log_level: str = Field(default="INFO")

    @field_validator("platform_api_url")
    @classmethod
    def _ensure_http_scheme(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ClawMarkConfigurationError("Platform API URL must start with http:// or https://")
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @classmethod
    def load(cls, config_manager: Optional[ConfigManager] = None) -> "ClawMarkSettings":
        """Load settings from config.json with environment overrides."""
        manager = config_manager or ConfigManager()
        raw_config: Dict[str, Any] = manager.get("clawmark", {}) or {}
        defaults = cls.model_fields

        def pick(field: str, env: Optional[str] = None) -> Any:
            if env and os.getenv(env) not in (None, ""):
                return os.getenv(env)
            if field in raw_config:
                return raw_config[field]
            default = defaults[field]
            return default.default_factory() if default.default_factory else default.default

        origins = pick("allowed_origins", "ALLOWED_ORIGINS")
        if isinstance(origins, str):
            origins = [o.strip() for o in origins.split(",") if o.strip()]

        environment = os.getenv("CLAWMARK_ENV") or pick("environment", "NODE_ENV")

        return cls(
            platform_api_url=pick("platform_api_url", "MOLTBOOK_API_URL"),
            platform_api_key=pick("platform_api_key", "MOLTBOOK_API_KEY"),
            platform_timeout_seconds=pick("platform_timeout_seconds", "MOLTBOOK_HTTP_TIMEOUT"),
            posts_page_size=pick("posts_page_size", "CLAWMARK_POSTS_PAGE_SIZE"),
            challenge_ttl_seconds=pick("challenge_ttl_seconds", "CLAWMARK_CHALLENGE_TTL"),
            challenge_namespace=pick("challenge_namespace"),
            cleanup_interval_minutes=pick("cleanup_interval_minutes", "CLAWMARK_CLEANUP_INTERVAL"),
            allowed_origins=origins or ["*"],
            host=pick("host", "HOST"),
            port=pick("port", "PORT"),
            environment=environment,
            log_level=pick("log_level", "CLAWMARK_LOG_LEVEL"),
        )
