"""Factories for common Success and Failure shapes.

Templates are rendered with ``render_template``: placeholders are positional
(``{0}``, ``{1}``, ...) and filled left to right by the trailing arguments.
"""

from __future__ import annotations

from typing import Any, Final, overload

from systematics.failure_types import BasicFailureType, FailureType, render_template
from systematics.outcome import Failure, Success

#: Shared Success for operations whose result is "it happened".
SUCCESS: Final[Success[bool]] = Success(True)

GENERIC_TITLE: Final[str] = "Generic failure"

_MISSING: Final = object()


@overload
def success() -> Success[bool]: ...


@overload
def success[V](value: V) -> Success[V]: ...


def success(value: Any = _MISSING) -> Success[Any]:
    """Return ``SUCCESS`` when called bare, else a Success wrapping ``value``."""
    if value is _MISSING:
        return SUCCESS
    return Success(value)


def generic_failure(
    title: str | None = None, template: str | None = None, *args: Any
) -> Failure:
    """Create a GENERIC failure.

    Examples:
        generic_failure()                           # title "Generic failure"
        generic_failure("Lookup failed")            # empty detail
        generic_failure("Lookup failed", "No user {0}", user_id)
    """
    if title is None:
        title = GENERIC_TITLE
    detail = render_template(template, *args) if template is not None else ""
    return Failure(BasicFailureType.GENERIC, title, detail)


def caused_failure(
    cause: BaseException,
    title: str = "",
    template: str | None = None,
    *args: Any,
) -> Failure:
    """Create a GENERIC failure attached to the exception that triggered it."""
    detail = render_template(template, *args) if template is not None else ""
    return Failure(BasicFailureType.GENERIC, title, detail, cause)


def typed_failure(failure_type: FailureType, *args: Any) -> Failure:
    """Create a failure titled and worded by its FailureType.

    The detail is ``failure_type.template`` rendered with ``args``.
    """
    return Failure(
        failure_type,
        failure_type.title,
        render_template(failure_type.template, *args),
    )
