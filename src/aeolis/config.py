from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import logging
import os

from aeolis.errors import InvalidSettings


def _env(name: str, default: str):
    return lambda: os.getenv(name, default)


class Settings(BaseModel):
    # env defaults are raw strings; pydantic coerces and validates them
    model_config = ConfigDict(validate_default=True)

    log_level: str = Field(default_factory=_env("AEOLIS_LOG_LEVEL", "WARNING"))

    # 0 means unlimited
    max_dispatches: int = Field(
        default_factory=_env("AEOLIS_MAX_DISPATCHES", "0"), ge=0
    )

    skip_blank_lines: bool = Field(
        default_factory=_env("AEOLIS_SKIP_BLANK_LINES", "false")
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"Unknown log level '{value}'")
        return value


def load_settings(**overrides) -> Settings:
    """
    Build Settings from the environment plus explicit overrides.

    Raises:
        InvalidSettings naming the first offending field.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(part) for part in err["loc"]) or "settings"
        raise InvalidSettings(field, err["msg"]) from e
