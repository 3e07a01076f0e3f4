"""Exception hierarchy for systematics."""

from __future__ import annotations


class SystematicsError(Exception):
    """Base exception for all systematics errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(SystematicsError):
    """Configuration validation or resolution failed."""


class OutcomeStateError(SystematicsError):
    """An Outcome operation was used against the wrong variant.

    Raised by ``get()``/``as_success()`` on a Failure and ``as_failure()`` on a
    Success. These are contract violations in the calling code, not domain
    failures, so the library never turns them back into Failures.
    """


class MissingValueError(SystematicsError):
    """A Success was constructed without a value."""


class TemplateError(SystematicsError):
    """A failure message template could not be rendered."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        template: str | None = None,
        expected: int | None = None,
        received: int | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.template = template
        self.expected = expected
        self.received = received


class SupplierError(SystematicsError):
    """Uniform wrapper for anything raised inside a fallible supplier."""

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        original: BaseException | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.original = original
