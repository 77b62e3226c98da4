from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from urllib.parse import urlparse
import logging
from functools import lru_cache


class Settings(BaseSettings):
    """
    Centralized adapter configuration with type validation.
    Automatically reads variables from the environment and a .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Cloudinary credentials ---
    # CLOUDINARY_URL has the form cloudinary://<api_key>:<api_secret>@<cloud_name>
    CLOUDINARY_URL: Optional[str] = None
    CLOUDINARY_CLOUD_NAME: Optional[str] = None
    CLOUDINARY_API_KEY: Optional[str] = None
    CLOUDINARY_API_SECRET: Optional[str] = None

    # --- Request Settings ---
    CLOUDINARY_SECURE: bool = True
    CLOUDINARY_TIMEOUT: Optional[int] = None
    HTTP_TIMEOUT_SECONDS: int = 30

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def fill_credentials_from_url(cls, values):
        if not isinstance(values, dict):
            return values

        url = values.get("CLOUDINARY_URL")
        if url:
            parsed = urlparse(url)
            if parsed.scheme != "cloudinary":
                raise ValueError("CLOUDINARY_URL must start with 'cloudinary://'")
            # Explicitly set variables take precedence over the URL
            from_url = {
                "CLOUDINARY_CLOUD_NAME": parsed.hostname,
                "CLOUDINARY_API_KEY": parsed.username,
                "CLOUDINARY_API_SECRET": parsed.password,
            }
            for key, value in from_url.items():
                if not values.get(key) and value:
                    values[key] = value
            logging.info("Loaded Cloudinary credentials from CLOUDINARY_URL.")

        required_keys = [
            "CLOUDINARY_CLOUD_NAME",
            "CLOUDINARY_API_KEY",
            "CLOUDINARY_API_SECRET",
        ]
        for key in required_keys:
            if not values.get(key) or not str(values.get(key)).strip():
                raise ValueError(
                    f"{key} is required (set it directly or through CLOUDINARY_URL)"
                )

        return values


@lru_cache()
def get_settings() -> Settings:
    """
    Returns a cached instance of the adapter settings.
    The first call to this function will initialize the settings.
    """
    return Settings()
