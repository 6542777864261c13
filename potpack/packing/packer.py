"""
Near-Square Rectangle Packer

Greedy guillotine packer in the style of mapbox/potpack. Rectangles are
sorted by descending height and placed first-fit into a list of free
spaces, starting from a single space whose width is chosen so the packed
result comes out roughly square:

    start_width = max(ceil(sqrt(total_area / fill_factor)), max_width)

Each placement carves the rectangle out of the top-left corner of its
space, leaving at most two free spaces behind (one to the right of the
rectangle, one below it).
"""

import math
import logging
import numbers
import operator
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .rectangle import Rectangle
from .space import UNBOUNDED, Space, swap_remove

logger = logging.getLogger(__name__)

DEFAULT_FILL_FACTOR = 0.95


@dataclass
class PackingResult:
    """Summary of a packing call."""
    width: int
    height: int
    fill: float  # total rectangle area / (width * height)
    start_width: int
    num_rectangles: int
    num_spaces: int  # free spaces left over

    @property
    def dimensions(self) -> Tuple[int, int]:
        return (self.width, self.height)


def _validate_rectangles(rectangles: Sequence) -> None:
    """Raise ValueError if any rectangle has a non-positive or non-integer side."""
    for idx, rect in enumerate(rectangles):
        for side in ("width", "height"):
            value = getattr(rect, side)
            if (not isinstance(value, numbers.Integral) or isinstance(value, bool)
                    or value <= 0):
                raise ValueError(
                    f"Rectangle at index {idx} has invalid {side}: {value!r} "
                    f"(must be a positive integer)"
                )


class Packer:
    """
    Packs rectangles into a near-square bound.

    The rectangles passed to ``pack`` are sorted in place (tallest first)
    and get their ``x``/``y`` attributes assigned. Any object with integer
    ``width``/``height`` attributes and writable ``x``/``y`` works; see
    ``Rectangle``.

    Attributes:
        fill_factor (float): Target fill used to size the starting width
        width (int): Packed width of the last call
        height (int): Packed height of the last call
        fill (float): Fill ratio of the last call
        last_result (PackingResult): Full summary of the last call

    Example:
        >>> rects = [Rectangle(64, 32), Rectangle(32, 32)]
        >>> packer = Packer()
        >>> packer.pack(rects)
        (64, 64)
    """

    def __init__(self, fill_factor: float = DEFAULT_FILL_FACTOR):
        if not 0 < fill_factor <= 1:
            raise ValueError(f"fill_factor must be in (0, 1], got {fill_factor}")

        self.fill_factor = fill_factor
        self.width = 0
        self.height = 0
        self.fill = 0.0
        self.last_result: Optional[PackingResult] = None

    def start_width(self, total_area: int, max_width: int) -> int:
        """Width of the initial open-ended space."""
        return max(math.ceil(math.sqrt(total_area / self.fill_factor)), max_width)

    def pack(self, rectangles: List) -> Tuple[int, int]:
        """
        Pack rectangles, assigning each one's top-left position.

        Args:
            rectangles: Mutable list of rectangles; sorted in place by
                descending height (stable for equal heights)

        Returns:
            (packed_width, packed_height)

        Raises:
            ValueError: If a rectangle has a non-positive or non-integer side
            RuntimeError: If no free space can hold a rectangle (internal
                invariant violation, never expected for valid input)
        """
        _validate_rectangles(rectangles)

        if not rectangles:
            self._record(0, 0, 0, 0, 0, 0)
            logger.debug("Nothing to pack")
            return (0, 0)

        area = 0
        max_width = 0
        for rect in rectangles:
            area += operator.index(rect.width) * operator.index(rect.height)
            max_width = max(max_width, operator.index(rect.width))

        rectangles.sort(key=lambda r: r.height, reverse=True)

        start_width = self.start_width(area, max_width)

        # Single empty space, unbounded at the bottom
        spaces = [Space(0, 0, start_width, UNBOUNDED)]

        width = 0
        height = 0

        for rect in rectangles:
            # Plain ints keep the arithmetic exact against UNBOUNDED
            w = operator.index(rect.width)
            h = operator.index(rect.height)

            # Check smaller, more recently split spaces first
            for j in range(len(spaces) - 1, -1, -1):
                space = spaces[j]
                if not space.fits(w, h):
                    continue

                # Add the rectangle to the space's top-left corner
                # |-------|-------|
                # |  box  |       |
                # |_______|       |
                # |         space |
                # |_______________|
                rect.x = space.x
                rect.y = space.y

                height = max(height, space.y + h)
                width = max(width, space.x + w)

                if w == space.width and h == space.height:
                    swap_remove(spaces, j)

                elif h == space.height:
                    # |-------|---------------|
                    # |  box  | updated space |
                    # |_______|_______________|
                    space.x += w
                    space.width -= w

                elif w == space.width:
                    # |---------------|
                    # |      box      |
                    # |_______________|
                    # | updated space |
                    # |_______________|
                    space.y += h
                    space.height -= h

                else:
                    # |-------|-----------|
                    # |  box  | new space |
                    # |_______|___________|
                    # | updated space     |
                    # |___________________|
                    spaces.append(Space(space.x + w, space.y, space.width - w, h))
                    space.y += h
                    space.height -= h

                logger.debug(f"Placed {w}x{h} at ({rect.x}, {rect.y})")
                break
            else:
                raise RuntimeError(
                    f"No free space for {w}x{h} rectangle "
                    f"(start width {start_width}, {len(spaces)} spaces)"
                )

        self._record(width, height, area, start_width, len(rectangles), len(spaces))
        logger.info(f"Packed {len(rectangles)} rectangles into {width}x{height} "
                    f"(fill {self.fill:.1%})")

        return (width, height)

    def _record(self, width: int, height: int, area: int, start_width: int,
                num_rectangles: int, num_spaces: int):
        self.width = width
        self.height = height
        self.fill = area / (width * height) if width and height else 0.0
        self.last_result = PackingResult(
            width=width,
            height=height,
            fill=self.fill,
            start_width=start_width,
            num_rectangles=num_rectangles,
            num_spaces=num_spaces,
        )


def pack(rectangles: List, fill_factor: float = DEFAULT_FILL_FACTOR) -> Tuple[int, int]:
    """
    Pack rectangles in place with a throwaway Packer.

    Returns:
        (packed_width, packed_height)
    """
    return Packer(fill_factor).pack(rectangles)


def pack_sizes(sizes: Iterable[Tuple[int, int]],
               fill_factor: float = DEFAULT_FILL_FACTOR
               ) -> Tuple[int, int, List[Tuple[int, int]]]:
    """
    Pack (width, height) pairs without reordering the caller's data.

    Args:
        sizes: Iterable of (width, height) pairs
        fill_factor: Target fill used to size the starting width

    Returns:
        (packed_width, packed_height, positions) where positions[i] is the
        (x, y) of sizes[i]

    Example:
        >>> pack_sizes([(10, 10), (10, 20)])
        (10, 30, [(0, 20), (0, 0)])
    """
    rectangles = [Rectangle(width=w, height=h, rect_id=i)
                  for i, (w, h) in enumerate(sizes)]

    width, height = Packer(fill_factor).pack(rectangles)

    positions = [None] * len(rectangles)
    for rect in rectangles:
        positions[rect.rect_id] = (rect.x, rect.y)

    return width, height, positions
