"""Configuration schema and resolution for systematics.

Resolve once, freeze, then flow:
- ``Settings`` is the single source of truth for fields, defaults and validation
- ``FrozenConfig`` is the immutable payload the rest of the library reads
- ``config_scope`` provides a guarded ambient override for a block of code
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from dataclasses import dataclass
from functools import cache
import logging
import os
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from systematics.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping
    from types import TracebackType

logger = logging.getLogger(__name__)

ENV_PREFIX = "SYSTEMATICS_"

TemplatePolicy = Literal["strict", "lenient"]

_LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


# --- Schema (Pydantic wall) ---


class Settings(BaseModel):
    """Pydantic schema for configuration validation and defaults."""

    # strict: placeholder/argument count mismatch raises TemplateError
    # lenient: extra arguments are dropped, unfilled placeholders stay verbatim
    template_policy: TemplatePolicy = Field(default="strict")
    # Level used when attempt() logs a captured exception
    capture_log_level: str = Field(default="DEBUG")

    model_config = {"extra": "ignore"}

    @field_validator("template_policy", mode="before")
    @classmethod
    def normalize_policy(cls, v: Any) -> Any:
        """Accept any casing and surrounding whitespace."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("capture_log_level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept level names in any casing, or the numeric standard levels."""
        if isinstance(v, int) and not isinstance(v, bool):
            name = logging.getLevelName(v)
            return name if name in _LEVEL_NAMES else v
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("capture_log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Reject names that are not standard logging levels."""
        if v not in _LEVEL_NAMES:
            raise ValueError(
                f"capture_log_level must be one of {', '.join(_LEVEL_NAMES)}"
            )
        return v


# --- Immutable runtime payload ---


@dataclass(frozen=True)
class FrozenConfig:
    """Validated, immutable configuration read by the library at call time."""

    template_policy: TemplatePolicy
    capture_log_level: str

    @property
    def log_level(self) -> int:
        """Numeric logging level for ``capture_log_level``."""
        return logging.getLevelNamesMapping()[self.capture_log_level]

    @property
    def strict_templates(self) -> bool:
        """True when template argument counts must match exactly."""
        return self.template_policy == "strict"


# --- Loading ---


def load_env() -> dict[str, Any]:
    """Read ``SYSTEMATICS_*`` variables that name a known settings field."""
    known = set(Settings.model_fields)
    config: dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        field_name = key[len(ENV_PREFIX) :].lower()
        if field_name in known:
            config[field_name] = value
    return config


def resolve_config(overrides: Mapping[str, Any] | None = None) -> FrozenConfig:
    """Resolve configuration into a FrozenConfig.

    Precedence: defaults < environment < overrides.

    Args:
        overrides: Programmatic configuration overrides.

    Returns:
        FrozenConfig instance.

    Raises:
        ConfigurationError: If configuration validation fails.
    """
    merged = {**load_env(), **(overrides or {})}
    try:
        settings = Settings.model_validate(merged)
    except ValidationError as e:
        err = e.errors()[0]
        msg = err.get("msg") or "invalid value"
        # Remove "Value error, " prefix if present (Pydantic standard wrapper)
        if msg.startswith("Value error, "):
            msg = msg[13:]
        field = ".".join(str(part) for part in err.get("loc", ()))
        raise ConfigurationError(
            f"Configuration validation failed for {field or 'settings'}: {msg}",
            hint=f"Check the {ENV_PREFIX}{field.upper()} environment variable "
            "or the override passed in code.",
        ) from e

    frozen = FrozenConfig(
        template_policy=settings.template_policy,
        capture_log_level=settings.capture_log_level,
    )
    logger.debug("Resolved configuration: %s", frozen)
    return frozen


@cache
def _env_config() -> FrozenConfig:
    return resolve_config()


def clear_config_cache() -> None:
    """Forget the environment-derived default so the next read re-resolves it."""
    _env_config.cache_clear()


# --- Ambient scope (guarded) ---

_AMBIENT: contextvars.ContextVar[FrozenConfig | None] = contextvars.ContextVar(
    "systematics_config", default=None
)


def current_config() -> FrozenConfig:
    """Return the ambient scoped config, or the cached environment default."""
    ambient = _AMBIENT.get()
    if ambient is not None:
        return ambient
    return _env_config()


class ConfigScope:
    """Context manager that sets the ambient configuration for a block."""

    def __init__(self, cfg: FrozenConfig):
        self._token: contextvars.Token[FrozenConfig | None] | None = None
        self._cfg = cfg

    def __enter__(self) -> FrozenConfig:
        self._token = _AMBIENT.set(self._cfg)
        return self._cfg

    def __exit__(
        self,
        _: type[BaseException] | None,
        __: BaseException | None,
        ___: TracebackType | None,
    ) -> Literal[False]:
        if self._token is not None:
            _AMBIENT.reset(self._token)
        return False


@contextmanager
def config_scope(
    cfg_or_overrides: Mapping[str, Any] | FrozenConfig | None = None,
    **overrides: object,
) -> Generator[FrozenConfig]:
    """Create a scoped configuration context.

    Thread-safe and async-safe: the override lives in a ContextVar and is
    restored on exit.

    Args:
        cfg_or_overrides: Either a FrozenConfig to use directly, or a mapping
            of overrides to apply during resolution.
        **overrides: Additional override values (merged with cfg_or_overrides
            if it's a mapping).

    Yields:
        The FrozenConfig instance active in this scope.

    Example:
        with config_scope(template_policy="lenient"):
            failure = generic_failure("Lookup", "Missing {0} in {1}", "key")
    """
    if isinstance(cfg_or_overrides, FrozenConfig):
        cfg = cfg_or_overrides
    else:
        combined_overrides = {**(cfg_or_overrides or {}), **overrides}
        cfg = resolve_config(overrides=combined_overrides)

    with ConfigScope(cfg):
        yield cfg
