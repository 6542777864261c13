"""
Rectangle Class for 2D Packing

Represents an axis-aligned rectangle to be placed in the packed atlas.
Width and height are supplied by the caller; the packer fills in the
top-left (x, y) placement.
"""

import numbers
import numpy as np
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass


def _is_positive_int(value: Any) -> bool:
    return (isinstance(value, numbers.Integral)
            and not isinstance(value, bool)
            and value > 0)


@dataclass
class Rectangle:
    """
    2D rectangle for bin packing.

    Width and height are fixed once constructed; the packer only writes x
    and y. Resizing a rectangle means building a new one.

    Attributes:
        width (int): X-extent in pixels
        height (int): Y-extent in pixels
        x (int): Left edge after packing (None until placed)
        y (int): Top edge after packing (None until placed)
        rect_id (int): Caller identifier, carried through untouched
        label (str): Optional display name (sprite or texture name)
    """

    width: int
    height: int
    x: Optional[int] = None
    y: Optional[int] = None
    rect_id: int = 0
    label: str = ""

    def __post_init__(self):
        """Validate dimensions are positive integers and store them as int."""
        if not _is_positive_int(self.width) or not _is_positive_int(self.height):
            raise ValueError(
                f"Rectangle dimensions must be positive integers, "
                f"got {self.width!r}x{self.height!r}"
            )

        # numpy integers overflow against the unbounded space height
        self.width = int(self.width)
        self.height = int(self.height)

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def placed(self) -> bool:
        """Whether the packer has assigned a position."""
        return self.x is not None and self.y is not None

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        """
        Placed bounds as (left, top, right, bottom), right/bottom exclusive.

        Raises:
            ValueError: If the rectangle has not been placed yet
        """
        if not self.placed:
            raise ValueError(f"Rectangle {self.rect_id} has not been placed")
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.rect_id,
            "label": self.label,
            "width": self.width,
            "height": self.height,
            "x": self.x,
            "y": self.y,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_id: int = 0) -> "Rectangle":
        """
        Build a rectangle from a mapping with ``width`` and ``height`` keys.

        Args:
            data: Mapping with width, height and optional id/label
            default_id: Identifier used when the mapping has no ``id``

        Returns:
            Unplaced rectangle
        """
        try:
            width = data["width"]
            height = data["height"]
        except KeyError as e:
            raise ValueError(f"Rectangle entry missing key: {e.args[0]}") from e

        return cls(
            width=width,
            height=height,
            rect_id=data.get("id", default_id),
            label=str(data.get("label", "")),
        )

    def __repr__(self) -> str:
        return f"Rectangle(id={self.rect_id}, w={self.width}, h={self.height}, pos=({self.x}, {self.y}))"


def generate_random_rectangles(n_rectangles: int,
                               size_range: Tuple[int, int] = (8, 128),
                               seed: int = None) -> List[Rectangle]:
    """
    Generate random rectangles for testing and benchmarking.

    Args:
        n_rectangles: Number of rectangles to generate
        size_range: Inclusive (min, max) side length in pixels
        seed: Random seed for reproducibility

    Returns:
        List of unplaced rectangles with ids 0..n-1

    Example:
        >>> rects = generate_random_rectangles(10, (16, 64), seed=0)
        >>> print(f"Generated {len(rects)} rectangles")
    """
    min_size, max_size = size_range
    if min_size < 1 or max_size < min_size:
        raise ValueError(f"Invalid size range: {size_range}")

    rng = np.random.default_rng(seed)
    sides = rng.integers(min_size, max_size, size=(n_rectangles, 2), endpoint=True)

    return [
        Rectangle(width=int(w), height=int(h), rect_id=i)
        for i, (w, h) in enumerate(sides)
    ]
