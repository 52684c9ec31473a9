"""
Settings for the calculator, read from LUCA_* environment variables
(or a local .env file).
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from luca.parser import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT


class Settings(BaseSettings):
    # "apples" resolves to "apple" when only the singular is defined
    plural_fallback: bool = False

    # Parentheses and unary signs deeper than this are a parser error
    max_nesting_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, le=MAX_DEPTH_LIMIT)

    # Logging
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(env_prefix="LUCA_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Settings read from the environment once per process"""
    return Settings()
