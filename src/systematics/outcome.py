"""Outcome: an explicit Success | Failure result type.

Operations that can fail return an ``Outcome`` instead of raising, which makes
failures a predictable part of the data flow. Outcomes compose through
``map``/``flat_map``/``or_else``/``recover`` without ``isinstance`` checks,
and a Failure short-circuits every transformation after it.

``attempt`` is the only place exceptions are turned into Failures; exceptions
raised inside a ``map`` or ``flat_map`` function propagate to the caller.

Example:
    port = (
        attempt(lambda: os.environ["PORT"])
        .map(int)
        .flat_map(check_port_range)
        .get_or(8080)
    )
"""

from __future__ import annotations

import dataclasses
import logging
import typing
from typing import Any, NoReturn, final

from systematics.config import current_config
from systematics.errors import MissingValueError, OutcomeStateError
from systematics.fallible import FallibleSupplier
from systematics.failure_types import BasicFailureType, FailureType

if typing.TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

_VARIANTS = frozenset({"Success", "Failure"})


class _OutcomeOps:
    """Behavior shared by both variants; closed to any third variant."""

    __slots__ = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # dataclass(slots=True) rebuilds the class, so the same name recurs here
        if cls.__module__ != __name__ or cls.__qualname__ not in _VARIANTS:
            raise TypeError(
                f"Cannot subclass {cls.__mro__[1].__name__}: "
                "an Outcome is either a Success or a Failure"
            )

    def is_failure(self) -> bool:
        """Exact negation of ``is_success``."""
        return not self.is_success()  # type: ignore[attr-defined]


@final
@dataclasses.dataclass(frozen=True, slots=True)
class Success[V](_OutcomeOps):
    """A successful outcome holding a value that is never None."""

    value: V

    def __post_init__(self) -> None:
        if self.value is None:
            raise MissingValueError(
                "Success requires a value, got None",
                hint="Use success() when the outcome carries no computed value.",
            )

    def is_success(self) -> bool:
        return True

    def get(self) -> V:
        return self.value

    def get_potential(self) -> V | None:
        return self.value

    def get_or(self, default: object) -> V:  # noqa: ARG002
        return self.value

    def or_else_raise(
        self,
        factory: Callable[[Failure], BaseException] | None = None,  # noqa: ARG002
    ) -> V:
        return self.value

    def as_success(self) -> Success[V]:
        return self

    def as_failure(self) -> NoReturn:
        raise OutcomeStateError("This Success cannot be used as a Failure")

    def map[NV](self, fn: Callable[[V], NV]) -> Success[NV]:
        """Apply ``fn`` to the value and wrap the result in a new Success."""
        return Success(fn(self.value))

    def flat_map[NV](self, fn: Callable[[V], Outcome[NV]]) -> Outcome[NV]:
        """Return ``fn(value)``, for chaining steps that may themselves fail."""
        return fn(self.value)

    def on_success(self, consumer: Callable[[V], object]) -> None:
        consumer(self.value)

    def on_failure(self, consumer: Callable[[Failure], object]) -> None:  # noqa: ARG002
        pass

    def or_else(
        self,
        alternative: Callable[[], Outcome[V]] | FallibleSupplier[Outcome[V]],  # noqa: ARG002
    ) -> Success[V]:
        return self

    def recover(self, fn: Callable[[Failure], V]) -> Success[V]:  # noqa: ARG002
        return self

    def recover_with(
        self,
        fn: Callable[[Failure], Outcome[V]],  # noqa: ARG002
    ) -> Success[V]:
        return self


@final
@dataclasses.dataclass(frozen=True, slots=True)
class Failure(_OutcomeOps):
    """A failed outcome: typed, titled, detailed, optionally caused.

    A Failure carries no value, so the same instance stands in for an
    ``Outcome`` of any value type. ``map`` and ``flat_map`` return it as is.
    """

    type: FailureType = BasicFailureType.GENERIC
    title: str = ""
    detail: str = ""
    cause: BaseException | None = None

    def is_success(self) -> bool:
        return False

    def get(self) -> NoReturn:
        raise OutcomeStateError(
            "No success value is present for this failure. See attached cause."
        ) from self.cause

    def get_potential(self) -> None:
        return None

    def get_or[D](self, default: D) -> D:
        return default

    def or_else_raise(
        self, factory: Callable[[Failure], BaseException] | None = None
    ) -> NoReturn:
        """Raise ``factory(self)``, or OutcomeStateError, chained to the cause."""
        if factory is None:
            self.get()
        raise factory(self) from self.cause

    def as_success(self) -> NoReturn:
        raise OutcomeStateError("This Failure cannot be used as a Success")

    def as_failure(self) -> Failure:
        return self

    def map(self, fn: Callable[[Any], object]) -> Failure:  # noqa: ARG002
        return self

    def flat_map(self, fn: Callable[[Any], object]) -> Failure:  # noqa: ARG002
        return self

    def on_success(self, consumer: Callable[[Any], object]) -> None:  # noqa: ARG002
        pass

    def on_failure(self, consumer: Callable[[Failure], object]) -> None:
        consumer(self)

    def or_else[V](
        self, alternative: Callable[[], Outcome[V]] | FallibleSupplier[Outcome[V]]
    ) -> Outcome[V]:
        """Evaluate the alternative.

        Errors from a FallibleSupplier alternative become a Failure; errors
        from a plain callable propagate.
        """
        logger.debug("Falling back to alternative after failure %r", self.title)
        if isinstance(alternative, FallibleSupplier):
            try:
                return alternative.supply()
            except Exception as exc:
                _log_captured(alternative, exc)
                return Failure(cause=exc)
        return alternative()

    def recover[V](self, fn: Callable[[Failure], V]) -> Success[V]:
        """Turn this failure into a Success of ``fn(self)``."""
        return Success(fn(self))

    def recover_with[V](self, fn: Callable[[Failure], Outcome[V]]) -> Outcome[V]:
        return fn(self)


type Outcome[V] = Success[V] | Failure


def attempt[V](supplier: Callable[[], V] | FallibleSupplier[V]) -> Outcome[V]:
    """Run ``supplier`` and capture its result as an Outcome.

    A normal return becomes a Success. Any ``Exception`` becomes a Failure
    whose ``cause`` is that exception; this includes a supplier returning
    None, which cannot be a Success value. ``KeyboardInterrupt`` and other
    non-``Exception`` signals propagate.

    Args:
        supplier: Zero-argument callable or FallibleSupplier.

    Returns:
        Success wrapping the value, or Failure carrying the raised exception.
    """
    run = supplier.supply if isinstance(supplier, FallibleSupplier) else supplier
    try:
        return Success(run())
    except Exception as exc:
        _log_captured(supplier, exc)
        return Failure(cause=exc)


def _log_captured(supplier: object, exc: Exception) -> None:
    name = getattr(supplier, "__qualname__", None) or repr(supplier)
    logger.log(
        current_config().log_level,
        "Captured %s from %s: %s",
        type(exc).__name__,
        name,
        exc,
    )
