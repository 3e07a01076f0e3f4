"""Shared test doubles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from systematics import FallibleSupplier, Outcome, TemplatedFailureType, success


class NewFailureType(TemplatedFailureType, Enum):
    """Caller-defined failure enumeration, as applications declare them."""

    NEW_FAILURE = ("New failure", "New failure: {0}")
    MISMATCH = ("Mismatch", "Expected {0}, got {1}")

    def __init__(self, title: str, template: str) -> None:
        self._title = title
        self._template = template

    @property
    def title(self) -> str:
        return self._title

    @property
    def template(self) -> str:
        return self._template


@dataclass(frozen=True)
class AdHocFailureType:
    """Plain record that satisfies FailureType structurally."""

    title: str
    template: str


class Recorder:
    """Callable that remembers every argument it was called with."""

    def __init__(self) -> None:
        self.calls: list[object] = []

    def __call__(self, arg: object) -> None:
        self.calls.append(arg)

    @property
    def called(self) -> bool:
        return bool(self.calls)


class KaboomSupplier(FallibleSupplier[Outcome[int]]):
    """Supplier whose computation always raises."""

    def supply(self) -> Outcome[int]:
        raise ValueError("Kaboom!")


class AlternativeSupplier(FallibleSupplier[Outcome[int]]):
    """Supplier that yields a fixed alternative outcome and counts calls."""

    def __init__(self) -> None:
        self.calls = 0

    def supply(self) -> Outcome[int]:
        self.calls += 1
        return success(246)
