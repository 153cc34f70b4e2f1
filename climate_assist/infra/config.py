from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    llm_provider: str = Field(default="gemini", validation_alias="LLM_PROVIDER")
    gemini_api_key: Optional[str] = Field(
        default=None, validation_alias="GOOGLE_GEMINI_API_KEY"
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash", validation_alias="GEMINI_MODEL"
    )
    openai_api_key: Optional[str] = Field(default=None, validation_alias="OPENAI_API_KEY")
    openai_api_base: Optional[str] = Field(
        default=None, validation_alias="OPENAI_API_BASE"
    )
    openai_model: str = Field(default="gpt-4.1-mini", validation_alias="OPENAI_MODEL")
    llm_temperature: float = Field(default=0.2, validation_alias="LLM_TEMPERATURE")
    persistence_backend: str = Field(
        default="supabase", validation_alias="PERSISTENCE_BACKEND"
    )
    supabase_url: Optional[str] = Field(default=None, validation_alias="SUPABASE_URL")
    supabase_anon_key: Optional[str] = Field(
        default=None, validation_alias="SUPABASE_ANON_KEY"
    )
    memory_auth_tokens: str = Field(default="", validation_alias="MEMORY_AUTH_TOKENS")
    openweather_api_key: Optional[str] = Field(
        default=None, validation_alias="OPENWEATHER_API_KEY"
    )
    openweather_base_url: str = Field(
        default="https://api.openweathermap.org",
        validation_alias="OPENWEATHER_BASE_URL",
    )
    fastapi_port: int = Field(default=8000, validation_alias="FASTAPI_PORT")
    log_path: Optional[str] = Field(default=None, validation_alias="LOG_PATH")
    error_log_path: Optional[str] = Field(
        default=None, validation_alias="ERROR_LOG_PATH"
    )
    cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")

    @field_validator("llm_provider", "persistence_backend", mode="after")
    @classmethod
    def normalize_backend_name(cls, value: str) -> str:
        return value.strip().lower() if value else value

    def memory_token_map(self) -> Dict[str, str]:
        """Parse `token:user_id` pairs separated by commas."""
        tokens: Dict[str, str] = {}
        for item in self.memory_auth_tokens.split(","):
            token, _, user_id = item.strip().partition(":")
            if token and user_id:
                tokens[token] = user_id.strip()
        return tokens

    def cors_origin_list(self) -> List[str]:
        origins = [item.strip() for item in self.cors_origins.split(",")]
        return [item for item in origins if item] or ["*"]


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return AppConfig()
