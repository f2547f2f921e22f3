"""Arithmetic on encoded sizes, where None stands for a variable size."""

from __future__ import annotations

from typing import Optional

Size = Optional[int]


def size_add(a: Size, b: Size) -> Size:
    """Sum of two sizes; variable if either is variable."""
    if a is None or b is None:
        return None
    return a + b


def size_mul(a: Size, b: Size) -> Size:
    """Product of two sizes; variable if either is variable."""
    if a is None or b is None:
        return None
    return a * b


def size_div(a: Size, b: Size) -> Size:
    """Integer quotient of two sizes; variable if either is variable."""
    if a is None or b is None:
        return None
    return a // b


def size_sum(*args: Size) -> Size:
    """Sum of one or more sizes; variable if any is variable."""
    if not args:
        raise TypeError("size_sum needs at least one size")
    first, *rest = args
    total = first
    for size in rest:
        total = size_add(total, size)
    return total