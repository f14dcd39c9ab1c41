from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import Platform


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CSV_LISTINGS_", env_file=".env", extra="ignore")

    log_level: str = "INFO"
    max_upload_bytes: int = 10 * 1024 * 1024
    default_platform: Platform = Platform.woocommerce


settings = Settings()
