"""
Free Space Records

A space is an unoccupied axis-aligned region a rectangle can be placed in.
Spaces only live inside a single packing call.
"""

import sys
from dataclasses import dataclass
from typing import List

# Height of the initial space, open-ended at the bottom. Integer so that
# the split arithmetic stays exact.
UNBOUNDED = sys.maxsize


@dataclass
class Space:
    """Free rectangle; mutated in place as rectangles are carved out of it."""

    x: int
    y: int
    width: int
    height: int

    def fits(self, width: int, height: int) -> bool:
        return width <= self.width and height <= self.height


def swap_remove(spaces: List[Space], index: int) -> Space:
    """
    Remove spaces[index] in O(1) by moving the last space into its slot.

    Order of the remaining spaces is not preserved.

    Returns:
        The removed space
    """
    last = spaces.pop()
    if index < len(spaces):
        removed = spaces[index]
        spaces[index] = last
        return removed
    return last
