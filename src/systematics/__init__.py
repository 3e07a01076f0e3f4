"""systematics: explicit, composable outcomes instead of exception control flow.

Public API:
    - Outcome / Success / Failure: the result sum type
    - attempt(): run raising code and capture it as an Outcome
    - success() / generic_failure() / caused_failure() / typed_failure(): factories
    - FailureType / BasicFailureType / TemplatedFailureType: failure categories
      with message templates
    - FallibleSupplier / fallible(): adapter for computations that may raise
    - resolve_config() / config_scope(): library configuration
"""

from __future__ import annotations

import logging

from systematics.config import (
    FrozenConfig,
    Settings,
    clear_config_cache,
    config_scope,
    current_config,
    resolve_config,
)
from systematics.errors import (
    ConfigurationError,
    MissingValueError,
    OutcomeStateError,
    SupplierError,
    SystematicsError,
    TemplateError,
)
from systematics.fallible import FallibleSupplier, fallible
from systematics.failure_types import (
    BasicFailureType,
    FailureType,
    TemplatedFailureType,
    parameter_count,
    render_template,
)
from systematics.outcome import Failure, Outcome, Success, attempt
from systematics.outcomes import (
    SUCCESS,
    caused_failure,
    generic_failure,
    success,
    typed_failure,
)

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("systematics")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("systematics").addHandler(logging.NullHandler())

__all__ = [
    "SUCCESS",
    "BasicFailureType",
    "ConfigurationError",
    "Failure",
    "FailureType",
    "FallibleSupplier",
    "FrozenConfig",
    "MissingValueError",
    "Outcome",
    "OutcomeStateError",
    "Settings",
    "Success",
    "SupplierError",
    "SystematicsError",
    "TemplateError",
    "TemplatedFailureType",
    "attempt",
    "caused_failure",
    "clear_config_cache",
    "config_scope",
    "current_config",
    "fallible",
    "generic_failure",
    "parameter_count",
    "render_template",
    "resolve_config",
    "success",
    "typed_failure",
]
