"""
Visualization modules for 2D rectangle packing

Provides interactive layout rendering.
"""

from .plotly_2d import PackingVisualizer

__all__ = ["PackingVisualizer"]
