from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_REGION = "us-east-1"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    FUNCTION_NAME: str = Field(default="GetRandom", min_length=1)
    AWS_REGION: Optional[str] = None
    LAMBDA_ENDPOINT_URL: Optional[str] = None
    # unset means a hung invocation keeps the request open
    INVOKE_TIMEOUT_SECONDS: Optional[float] = Field(default=None, gt=0)
    # unset means any count a list can hold
    MAX_COUNT: Optional[int] = Field(default=None, gt=0)

    HOST: str = "localhost"
    PORT: int = 3000
    LOG_LEVEL: str = "info"
    GATEWAY_VERSION: str = "v0.1.0"
    CORS_ALLOW_ORIGINS: List[str] = ["*"]

    def region(self, override: Optional[str] = None) -> str:
        return or_default_region(override or self.AWS_REGION)

    def endpoint_url(self, region: Optional[str] = None) -> str:
        if self.LAMBDA_ENDPOINT_URL:
            return self.LAMBDA_ENDPOINT_URL.rstrip("/")
        return f"https://lambda.{self.region(region)}.amazonaws.com"


def or_default_region(region: Optional[str]) -> str:
    return region or DEFAULT_REGION


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
