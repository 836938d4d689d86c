from typing import Literal, Optional

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SMARTSHOP_API_", extra="ignore")

    # v1 paths: user/login, apps/{appId}, search, report ...
    base_url: AnyHttpUrl = "https://api.smartshop.com/"
    # v2 paths: api/auth/login, api/user/profile, apps/featured ... (falls back to base_url)
    v2_base_url: Optional[AnyHttpUrl] = None

    timeout: float = 30.0
    total_retries: int = 3
    backoff_factor: float = 1.0
    verify_ssl: bool = True

    def base_url_for(self, family: str) -> str:
        if family == "v2" and self.v2_base_url is not None:
            return str(self.v2_base_url)
        return str(self.base_url)


class Settings(BaseSettings):

    # ---- app/runtime ----
    env: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ---- paging ----
    default_page_size: int = 20

    # ---- sandbox backend ----
    sandbox_host: str = "127.0.0.1"
    sandbox_port: int = 8000
    sandbox_reload: bool = False

    model_config = SettingsConfigDict(
        env_file = ".env",
        env_prefix="APP_",      # APP_ENV, APP_LOG_LEVEL, etc.
        env_nested_delimiter='__',
        extra = "ignore"
    )

    # ---- integrations ----
    api: ApiSettings = Field(default_factory=ApiSettings)


def get_settings() -> Settings:
    """Accessor kept in one place so callers never build Settings themselves."""
    return Settings()
