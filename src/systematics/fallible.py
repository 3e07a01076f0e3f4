"""Adapter for computations that may raise.

``FallibleSupplier`` lets a computation that can fail in arbitrary ways be
handed to code that only knows about plain zero-argument callables: calling it
either returns the value or raises a single, predictable ``SupplierError``.
``attempt`` bypasses the wrapper and records the original exception.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
import functools
import logging
from typing import TYPE_CHECKING

from systematics.errors import SupplierError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class FallibleSupplier[T](ABC):
    """A zero-argument computation that may raise.

    Subclasses implement ``supply``. Callers that want uniform error handling
    call the supplier (or ``get``); callers that want the raw exception use
    ``supply`` directly.
    """

    __slots__ = ()

    @abstractmethod
    def supply(self) -> T:
        """Compute the value. May raise anything."""

    def get(self) -> T:
        """Compute the value, converting any exception into ``SupplierError``."""
        try:
            return self.supply()
        except SupplierError:
            raise
        except Exception as exc:
            logger.debug(
                "Supplier %s raised %s; wrapping as SupplierError",
                self,
                type(exc).__name__,
            )
            raise SupplierError(
                str(exc) or type(exc).__name__, original=exc
            ) from exc

    def __call__(self) -> T:
        return self.get()


class _FunctionSupplier[T](FallibleSupplier[T]):
    def __init__(self, fn: Callable[[], T]) -> None:
        self._fn = fn
        functools.update_wrapper(self, fn)

    def supply(self) -> T:
        return self._fn()

    def __repr__(self) -> str:
        name = getattr(self._fn, "__qualname__", None) or repr(self._fn)
        return f"fallible({name})"


def fallible[T](fn: Callable[[], T]) -> FallibleSupplier[T]:
    """Wrap a zero-argument callable as a FallibleSupplier.

    Works as a decorator:

        @fallible
        def load_port() -> int:
            return int(os.environ["PORT"])

        load_port()           # raises SupplierError on a missing/bad value
        attempt(load_port)    # Failure whose cause is the KeyError/ValueError
    """
    if isinstance(fn, FallibleSupplier):
        return fn
    return _FunctionSupplier(fn)
