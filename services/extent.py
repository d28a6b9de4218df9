"""Single-pass minimum/maximum over totally ordered values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterable, Iterator, Protocol, TypeVar

from services.errors import EmptyInputError


class _Comparable(Protocol):
    def __lt__(self, other: Any) -> bool: ...


T = TypeVar("T", bound=_Comparable)


@dataclass(frozen=True)
class Extent(Generic[T]):
    """Closed ``[minimum, maximum]`` interval of an axis domain."""

    minimum: T
    maximum: T

    @property
    def is_degenerate(self) -> bool:
        return not self.minimum < self.maximum

    def __iter__(self) -> Iterator[T]:
        yield self.minimum
        yield self.maximum


def compute_extent(values: Iterable[T]) -> Extent[T]:
    """Return ``(min, max)`` of ``values`` without materializing them."""
    iterator = iter(values)
    try:
        first = next(iterator)
    except StopIteration:
        raise EmptyInputError("Cannot compute a domain from an empty sequence.") from None

    minimum = maximum = first
    for value in iterator:
        if value < minimum:
            minimum = value
        elif maximum < value:
            maximum = value
    return Extent(minimum, maximum)
