import codecs
import logging
import os
from functools import lru_cache
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from . import constants
from .exceptions import ConfigValidationError


logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """
        Class Config-Validation Model for library settings,
        read from `PATHVALUE_*` environment variables.
    """
    temp_prefix: str = constants.DEFAULT_TEMP_PREFIX
    encoding: str = constants.DEFAULT_ENCODING
    json_indent: Optional[int] = Field(default=constants.DEFAULT_JSON_INDENT, ge=0)
    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("temp_prefix")
    @classmethod
    def check_temp_prefix(cls, value: str) -> str:
        """ A temp prefix names a single directory entry"""
        if constants.SEP in value:
            raise ValueError(f"temp_prefix must not contain '{constants.SEP}', got '{value}'")
        return value

    @field_validator("encoding")
    @classmethod
    def check_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"Unknown text encoding: '{value}'")
        return value

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Unset or blank variables keep their defaults. `PATHVALUE_JSON_INDENT=none`
        writes compact JSON.
        """
        mapping = os.environ if env is None else env
        raw = {}
        for field, var in constants.SETTINGS_ENV_VARS.items():
            value = (mapping.get(var) or "").strip()
            if not value:
                continue
            logger.debug(f"Setting '{field}' overridden by {var}={value}")
            raw[field] = value

        if str(raw.get("json_indent", "")).lower() == "none":
            raw["json_indent"] = None

        try:
            return cls(**raw)
        except ValidationError as e:
            raise ConfigValidationError(f"Settings validation failed:\n{e}")


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Process-wide settings, read from the environment on first use."""
    return Settings.from_env()
