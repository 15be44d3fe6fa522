"""General utility functions and helper classes."""

from typing import Sequence, TypeVar

T = TypeVar("T")


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    """Split items into consecutive groups of at most `size` elements, preserving order."""
    if size < 1:
        raise ValueError(f"Group size must be a positive integer, got {size}")
    return [list(items[index : index + size]) for index in range(0, len(items), size)]
