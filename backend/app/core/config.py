from pathlib import Path
from typing import Optional
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[3] / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    project_name: str = "CuraLink"
    log_level: str = "INFO"

    openai_api_key: SecretStr = Field(description="OpenAI API key for summary generation")
    llm_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.2
    llm_timeout_seconds: float = Field(default=30.0, gt=0, description="Upper bound for one summarization call")

    database_url: str = Field(
        default="sqlite:///./curalink.db",
        description="SQLAlchemy URL of the shared record store"
    )

    redis_host: str = "localhost"
    redis_port: int = 6379
    rate_limit_enabled: bool = True

    # Outbound source requests
    trials_timeout_seconds: float = 15.0
    scholar_timeout_seconds: float = 10.0
    source_max_results: int = Field(default=10, ge=1, le=10)

    # Ingestion behaviour
    ingest_concurrency: int = Field(default=1, ge=1, le=16)
    store_unenriched: bool = Field(
        default=True,
        description="Store records whose summary could not be generated instead of dropping them"
    )

    @property
    def PROJECT_NAME(self) -> str:
        return self.project_name

    @property
    def LOG_LEVEL(self) -> str:
        return self.log_level

    @property
    def OPENAI_API_KEY(self) -> str:
        return self.openai_api_key.get_secret_value()

    @property
    def LLM_MODEL(self) -> str:
        return self.llm_model

    @property
    def LLM_TEMPERATURE(self) -> float:
        return self.llm_temperature

    @property
    def LLM_TIMEOUT_SECONDS(self) -> float:
        return self.llm_timeout_seconds

    @property
    def DATABASE_URL(self) -> str:
        return self.database_url

    @property
    def REDIS_HOST(self) -> str:
        return self.redis_host

    @property
    def REDIS_PORT(self) -> int:
        return self.redis_port

    @property
    def RATE_LIMIT_ENABLED(self) -> bool:
        return self.rate_limit_enabled

    @property
    def TRIALS_TIMEOUT_SECONDS(self) -> float:
        return self.trials_timeout_seconds

    @property
    def SCHOLAR_TIMEOUT_SECONDS(self) -> float:
        return self.scholar_timeout_seconds

    @property
    def SOURCE_MAX_RESULTS(self) -> int:
        return self.source_max_results

    @property
    def INGEST_CONCURRENCY(self) -> int:
        return self.ingest_concurrency

    @property
    def STORE_UNENRICHED(self) -> bool:
        return self.store_unenriched


settings = Settings()
