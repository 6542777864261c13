"""
Near-square 2D rectangle packing for texture atlases and sprite sheets

Greedy guillotine packer after mapbox/potpack: rectangles are sorted by
height and placed first-fit into free spaces under a width chosen so the
result stays close to square.
"""

from .packing import Packer, PackingResult, Rectangle, pack, pack_sizes

__version__ = "0.1.0"

__all__ = ["Packer", "PackingResult", "Rectangle", "pack", "pack_sizes"]
