"""Order-insensitive list comparison."""

from functools import cmp_to_key
from typing import Any, Callable, List, Optional

Comparison = Callable[[Any, Any], int]


def primitive_comparison(a: Any, b: Any) -> int:
    """Compare two items with ``<`` and ``>``.

    Items that cannot be ordered against each other (``1`` and ``"a"``) are
    ordered by type name instead, so mixed lists still sort.

    Returns:
        -1 if a < b, 1 if a > b, otherwise 0
    """
    try:
        if a < b:
            return -1
        if a > b:
            return 1
        return 0
    except TypeError:
        a_type, b_type = type(a).__name__, type(b).__name__
        if a_type == b_type:
            return 0
        return -1 if a_type < b_type else 1


def are_equal(
    left: Optional[List[Any]],
    right: Optional[List[Any]],
    compare: Optional[Comparison] = None,
) -> bool:
    """Compare two lists as multisets.

    Both lists are sorted IN PLACE with ``compare``; copy them first if the
    original order matters. After sorting, items in the same slot must have
    the same type and compare equal.

    Args:
        left: Left list, or None
        right: Right list, or None
        compare: Item comparison returning -1/0/1 (default: primitive_comparison)

    Returns:
        True if both are None or both hold the same items

    Examples:
        >>> are_equal([1, 2], [2, 1])
        True
        >>> are_equal(["a", "b"], [1, 2])
        False
    """
    if left is None and right is None:
        return True
    if left is None or right is None or len(left) != len(right):
        return False

    compare = compare or primitive_comparison
    key = cmp_to_key(compare)
    left.sort(key=key)
    right.sort(key=key)

    for left_item, right_item in zip(left, right):
        if type(left_item) is not type(right_item):
            return False
        if compare(left_item, right_item) != 0:
            return False
    return True


__all__ = ["are_equal", "primitive_comparison"]
