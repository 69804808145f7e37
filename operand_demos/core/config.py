"""Application configuration."""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    APP_NAME: str = Field(default="Operand Demos", env="APP_NAME")
    HOST: str = Field(default="0.0.0.0", env="HOST")
    PORT: int = Field(default=8080, env="PORT")

    # Operand indexing API settings
    OPERAND_ENDPOINT: str = Field(
        default="https://api.operand.ai", env="OPERAND_ENDPOINT"
    )
    OPERAND_API_KEY: Optional[str] = Field(default=None, env="OPERAND_API_KEY")
    OPERAND_PARENT_ID: Optional[str] = Field(default=None, env="OPERAND_PARENT_ID")
    OPERAND_POLL_INTERVAL_SECONDS: float = Field(
        default=0.5, env="OPERAND_POLL_INTERVAL_SECONDS", ge=0, le=60
    )  # Delay between indexing status checks

    # Outbound HTTP settings (None = no explicit timeout)
    HTTP_TIMEOUT_SECONDS: Optional[float] = Field(
        default=None, env="HTTP_TIMEOUT_SECONDS", gt=0
    )

    # S3-compatible storage settings (attachments are skipped unless all are set)
    S3_KEY: str = Field(default="", env="S3_KEY")
    S3_SECRET: str = Field(default="", env="S3_SECRET")
    S3_ENDPOINT: str = Field(default="", env="S3_ENDPOINT")
    S3_REGION: str = Field(default="", env="S3_REGION")
    S3_BUCKET: str = Field(default="", env="S3_BUCKET")

    @property
    def storage_configured(self) -> bool:
        """Whether every value needed to reach object storage is present."""
        return all(
            [
                self.S3_KEY,
                self.S3_SECRET,
                self.S3_ENDPOINT,
                self.S3_REGION,
                self.S3_BUCKET,
            ]
        )

    # OpenAI completion settings
    OPENAI_KEY: Optional[str] = Field(default=None, env="OPENAI_KEY")
    OPENAI_MODEL: str = Field(default="gpt-3.5-turbo-instruct", env="OPENAI_MODEL")

    # CORS settings
    CORS_ORIGINS: list[str] = Field(default=["*"], env="CORS_ORIGINS")

    # Environment
    ENVIRONMENT: str = Field(default="development", env="ENVIRONMENT")
    LOG_LEVEL: str = Field(default="INFO", env="LOG_LEVEL")
    DEBUG: bool = Field(default=False, env="DEBUG")

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings for the running process, read once from the environment."""
    return Settings()
