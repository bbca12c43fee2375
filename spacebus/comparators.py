"""Ordering and equality checks used for monitoring limits."""

from typing import Any


def compare(
    received: Any,
    wanted: Any,
    is_smaller: bool = False,
    is_equal_allowed: bool = False,
) -> bool:
    """Check ``received`` against ``wanted``.

    The result is true when ``received`` is strictly smaller than ``wanted``
    (``is_smaller``) or strictly greater (otherwise). Equality also satisfies
    the check when ``is_equal_allowed`` is set.
    """
    if is_equal_allowed and received == wanted:
        return True
    if is_smaller:
        return received < wanted
    return received > wanted


def compare_equal(received: Any, wanted: Any) -> bool:
    """Return whether ``received`` equals ``wanted``."""
    return received == wanted