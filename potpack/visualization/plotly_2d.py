"""
2D Layout Visualization using Plotly

Interactive rendering of packed atlases: one filled box per rectangle plus
the packed bound, with the origin at the top-left like an image.
"""

import logging
import plotly.graph_objects as go
import plotly.express as px
from typing import Optional, Sequence
from pathlib import Path

from ..packing.rectangle import Rectangle

logger = logging.getLogger(__name__)


class PackingVisualizer:
    """
    Interactive 2D visualization for rectangle packing.

    Features:
    - Render placed rectangles as filled shapes
    - Color-coded boxes with hover info and optional labels
    - Packed bound outline
    - Export to HTML for sharing

    Example:
        >>> visualizer = PackingVisualizer()
        >>> visualizer.visualize_layout(rects, width, height)
        >>> visualizer.save_html("atlas.html")
    """

    def __init__(self, color_scheme: str = "Viridis"):
        """
        Initialize visualizer.

        Args:
            color_scheme: Plotly color scheme for boxes
        """
        self.color_scheme = color_scheme
        self.fig = None

    def visualize_layout(
        self,
        rectangles: Sequence[Rectangle],
        width: int,
        height: int,
        show_labels: bool = True,
        title: Optional[str] = None,
    ) -> go.Figure:
        """
        Visualize a packed layout.

        Args:
            rectangles: Placed rectangles
            width: Packed width
            height: Packed height
            show_labels: Whether to write each rectangle's label or id on it
            title: Plot title

        Returns:
            Plotly figure object
        """
        fig = go.Figure()

        n_rects = len(rectangles)
        colors = px.colors.sample_colorscale(
            self.color_scheme, [i / max(n_rects - 1, 1) for i in range(n_rects)]
        )

        for idx, rect in enumerate(rectangles):
            self._add_rectangle(fig, rect, colors[idx], show_labels)

        self._add_bound(fig, width, height)

        if title is None:
            area = sum(rect.width * rect.height for rect in rectangles)
            fill = area / (width * height) if width and height else 0.0
            title = f"Packed {n_rects} rectangles into {width}x{height} (Fill: {fill:.1%})"

        fig.update_layout(
            title=title,
            xaxis=dict(title="X", range=[0, max(width, 1)], constrain="domain"),
            # Image coordinates: y grows downwards
            yaxis=dict(title="Y", range=[max(height, 1), 0], scaleanchor="x", scaleratio=1),
            showlegend=False,
            hovermode="closest",
            plot_bgcolor="white",
        )

        self.fig = fig
        return fig

    def _add_rectangle(self, fig: go.Figure, rect: Rectangle, color: str, show_label: bool):
        """Add one placed rectangle as a closed, filled scatter trace."""
        x0, y0, x1, y1 = rect.bounds
        name = rect.label or f"Rect {rect.rect_id}"

        fig.add_trace(
            go.Scatter(
                x=[x0, x1, x1, x0, x0],
                y=[y0, y0, y1, y1, y0],
                fill="toself",
                fillcolor=color,
                mode="lines",
                line=dict(color="black", width=1),
                opacity=0.8,
                name=name,
                hovertemplate=(
                    f"{name}<br>pos: ({x0}, {y0})<br>"
                    f"size: {rect.width}x{rect.height}<extra></extra>"
                ),
            )
        )

        if show_label:
            fig.add_annotation(
                x=(x0 + x1) / 2,
                y=(y0 + y1) / 2,
                text=name,
                showarrow=False,
                font=dict(size=10),
            )

    def _add_bound(self, fig: go.Figure, width: int, height: int):
        fig.add_shape(
            type="rect",
            x0=0,
            y0=0,
            x1=width,
            y1=height,
            line=dict(color="gray", width=2, dash="dash"),
        )

    def save_html(self, filepath: str):
        """
        Save current figure as HTML.

        Args:
            filepath: Path to save HTML file
        """
        if self.fig is None:
            raise ValueError("No figure to save. Call visualize_layout first.")

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        self.fig.write_html(str(filepath))
        logger.info(f"Visualization saved to: {filepath}")

    def show(self):
        """Display current figure."""
        if self.fig is None:
            raise ValueError("No figure to show. Call visualize_layout first.")

        self.fig.show()
