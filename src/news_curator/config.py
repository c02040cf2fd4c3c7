from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, SecretStr, field_validator, model_validator


class Config(BaseModel):
    model_config = ConfigDict(extra="ignore")

    database_url: str = "sqlite:///./news_curator.db"

    base_url: str = "https://api.openai.com/v1"
    api_key: SecretStr | None = None
    model: str = "gpt-4.1-nano"
    temperature: float = 0.2
    max_output_tokens: int = 1024
    web_search: bool = True
    agent_timeout: float = 120.0

    host: str = "127.0.0.1"
    port: int = 8000

    verbose: bool = False

    @model_validator(mode="before")
    @classmethod
    def apply_env_defaults(cls, data: object) -> object:
        load_dotenv(override=False)
        values = dict(data) if isinstance(data, dict) else {}

        env_map = {
            "database_url": "NEWS_CURATOR_DATABASE_URL",
            "base_url": "NEWS_CURATOR_BASE_URL",
            "api_key": "NEWS_CURATOR_API_KEY",
            "model": "NEWS_CURATOR_MODEL",
            "temperature": "NEWS_CURATOR_TEMPERATURE",
            "max_output_tokens": "NEWS_CURATOR_MAX_OUTPUT_TOKENS",
            "web_search": "NEWS_CURATOR_WEB_SEARCH",
            "agent_timeout": "NEWS_CURATOR_AGENT_TIMEOUT",
            "host": "NEWS_CURATOR_HOST",
            "port": "NEWS_CURATOR_PORT",
        }
        for field_name, env_name in env_map.items():
            if field_name not in values or values[field_name] is None:
                env_value = os.getenv(env_name)
                if env_value not in (None, ""):
                    values[field_name] = env_value

        if values.get("api_key") is None:
            openai_key = os.getenv("OPENAI_API_KEY")
            if openai_key:
                values["api_key"] = openai_key
        return values

    @field_validator("temperature")
    @classmethod
    def validate_temperature(cls, value: float) -> float:
        if not (0.0 <= value <= 2.0):
            raise ValueError("temperature must be between 0.0 and 2.0")
        return value

    @field_validator("max_output_tokens")
    @classmethod
    def validate_max_output_tokens(cls, value: int) -> int:
        if value < 1:
            raise ValueError("max_output_tokens must be >= 1")
        return value

    @field_validator("agent_timeout")
    @classmethod
    def validate_agent_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("agent_timeout must be > 0")
        return value

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError("base_url must be an absolute http(s) URL")
        return value.rstrip("/")

    def api_key_value(self) -> str | None:
        if self.api_key is None:
            return None
        return self.api_key.get_secret_value()
