"""
2D Rectangle Packing

This module implements the packer with:
- Rectangle records filled in with their placement
- Free space list split guillotine-style on each placement
- Reverse first-fit scan over the free spaces
"""

from .rectangle import Rectangle, generate_random_rectangles
from .space import Space, UNBOUNDED
from .packer import Packer, PackingResult, pack, pack_sizes

__all__ = [
    "Rectangle",
    "generate_random_rectangles",
    "Space",
    "UNBOUNDED",
    "Packer",
    "PackingResult",
    "pack",
    "pack_sizes",
]
