# -*- coding: utf-8 -*-
"""Runtime settings read from ``HASHLINK_*`` environment variables."""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .hashlink import DEFAULT_MAX_SIZE
from .ids import DEFAULT_ALPHABET, DEFAULT_LENGTH

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="HASHLINK_", env_file=".env")

    # Link store, a pyfilesystem2 URL or a directory path.
    db: str = "data"
    hostname: str = "http://localhost:5377"
    id_alphabet: str = Field(DEFAULT_ALPHABET, min_length=1)
    id_length: int = Field(DEFAULT_LENGTH, gt=0)
    host: str = "0.0.0.0"
    port: int = 5377
    directory: str = "upload"
    max_size: int = Field(DEFAULT_MAX_SIZE, gt=0)

    @field_validator("hostname")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def log(self) -> None:
        logger.info("DB Path %s", self.db)
        logger.info("Hostname %s", self.hostname)
        logger.info("Directory %s", self.directory)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
