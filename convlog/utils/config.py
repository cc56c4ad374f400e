"""Configuration and environment settings."""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

_FALSY = {"", "0", "false", "no", "off"}


class Settings(BaseSettings):
    """App settings from env or .env, read once at startup."""

    # Log format: Heroku drain lines carry their own timestamp prefix
    heroku: bool = Field(default=False, validation_alias="HEROKU")

    # Disclose raw user ids next to their hash
    user_id: bool = Field(default=False, validation_alias="USER_ID")

    # Logging
    log_json: bool = Field(default=False, validation_alias="LOG_JSON")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        populate_by_name = True

    @field_validator("heroku", "user_id", "log_json", mode="before")
    @classmethod
    def _truthy_flag(cls, value):
        # Any non-empty value enables the flag, except the usual false spellings
        if isinstance(value, str):
            return value.strip().lower() not in _FALSY
        return bool(value)


settings = Settings()
