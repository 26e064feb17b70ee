"""
Four-state comparison result shared by the partial orders.
"""

from __future__ import annotations

from enum import Enum


class Ordering(str, Enum):
    """
    Result of comparing two features.

    Attributes:
        LESS: Left side orders before the right side
        EQUAL: Both sides are equal
        GREATER: Left side orders after the right side
        INCOMPARABLE: No order relation holds
    """
    LESS = 'less'
    EQUAL = 'equal'
    GREATER = 'greater'
    INCOMPARABLE = 'incomparable'

    @classmethod
    def from_values(cls, a, b) -> 'Ordering':
        """Order two totally ordered values."""
        if a < b:
            return cls.LESS
        if a > b:
            return cls.GREATER
        return cls.EQUAL

    def reverse(self) -> 'Ordering':
        """The result of the same comparison with sides swapped."""
        if self is Ordering.LESS:
            return Ordering.GREATER
        if self is Ordering.GREATER:
            return Ordering.LESS
        return self


__all__ = ['Ordering']
