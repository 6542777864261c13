"""
Metrics Calculator for Packing Evaluation

Metrics for judging packing quality and checking placement validity.
"""

import numpy as np
from typing import Dict, List, Sequence, Tuple, Any

from ..packing.rectangle import Rectangle


def _placed_bounds(rectangles: Sequence[Rectangle]) -> np.ndarray:
    """Stack placed bounds into an (n, 4) array of left, top, right, bottom."""
    if not rectangles:
        return np.zeros((0, 4), dtype=np.int64)
    return np.array([rect.bounds for rect in rectangles], dtype=np.int64)


class MetricsCalculator:
    """
    Calculate metrics for rectangle packing evaluation.

    Metrics include:
    - Fill ratio (rectangle area / packed area)
    - Wasted area
    - Aspect ratio of the packed bound (closeness to square)
    - Overlap and containment checks for placements
    """

    @staticmethod
    def calculate_total_area(rectangles: Sequence[Rectangle]) -> int:
        return int(sum(rect.width * rect.height for rect in rectangles))

    @staticmethod
    def calculate_fill_ratio(rectangles: Sequence[Rectangle], width: int, height: int) -> float:
        """
        Calculate fill ratio.

        Fill ratio = Total rectangle area / (width * height)

        Args:
            rectangles: Packed rectangles
            width: Packed width
            height: Packed height

        Returns:
            Fill ratio [0, 1], 0.0 for an empty bound
        """
        bound_area = width * height
        if bound_area == 0:
            return 0.0
        return MetricsCalculator.calculate_total_area(rectangles) / bound_area

    @staticmethod
    def calculate_wasted_area(rectangles: Sequence[Rectangle], width: int, height: int) -> int:
        """Area inside the packed bound not covered by any rectangle."""
        return width * height - MetricsCalculator.calculate_total_area(rectangles)

    @staticmethod
    def calculate_aspect_ratio(width: int, height: int) -> float:
        """
        Calculate how far the bound is from square.

        Returns:
            Long side / short side (1.0 is square), 0.0 for an empty bound
        """
        if width == 0 or height == 0:
            return 0.0
        return max(width, height) / min(width, height)

    @staticmethod
    def find_overlaps(rectangles: Sequence[Rectangle]) -> List[Tuple[int, int]]:
        """
        Find pairs of placed rectangles that overlap.

        Touching edges do not count as overlap.

        Args:
            rectangles: Placed rectangles

        Returns:
            List of (i, j) index pairs with i < j

        Raises:
            ValueError: If any rectangle has not been placed
        """
        bounds = _placed_bounds(rectangles)
        n = len(bounds)
        if n < 2:
            return []

        left, top, right, bottom = bounds.T

        # Pairwise interval intersection on both axes
        overlap_x = (left[:, None] < right[None, :]) & (left[None, :] < right[:, None])
        overlap_y = (top[:, None] < bottom[None, :]) & (top[None, :] < bottom[:, None])
        overlaps = np.triu(overlap_x & overlap_y, k=1)

        return [(int(i), int(j)) for i, j in zip(*np.nonzero(overlaps))]

    @staticmethod
    def check_containment(rectangles: Sequence[Rectangle], width: int, height: int) -> bool:
        """
        Check every placed rectangle lies within [0, width) x [0, height).

        Raises:
            ValueError: If any rectangle has not been placed
        """
        bounds = _placed_bounds(rectangles)
        if len(bounds) == 0:
            return True

        left, top, right, bottom = bounds.T
        return bool(np.all(left >= 0) and np.all(top >= 0)
                    and np.all(right <= width) and np.all(bottom <= height))

    @staticmethod
    def calculate_all_metrics(rectangles: Sequence[Rectangle], width: int, height: int) -> Dict[str, Any]:
        """
        Calculate all available metrics for a packed layout.

        Args:
            rectangles: Placed rectangles
            width: Packed width
            height: Packed height

        Returns:
            Dictionary of all metrics
        """
        metrics = {
            "num_rectangles": len(rectangles),
            "packed_width": width,
            "packed_height": height,
            "total_area": MetricsCalculator.calculate_total_area(rectangles),
            "wasted_area": MetricsCalculator.calculate_wasted_area(rectangles, width, height),
            "fill_ratio": MetricsCalculator.calculate_fill_ratio(rectangles, width, height),
            "aspect_ratio": MetricsCalculator.calculate_aspect_ratio(width, height),
            "num_overlaps": len(MetricsCalculator.find_overlaps(rectangles)),
            "contained": MetricsCalculator.check_containment(rectangles, width, height),
        }

        return metrics

    @staticmethod
    def print_metrics(metrics: Dict[str, Any], title: str = "Metrics"):
        """
        Print metrics in a formatted table.

        Args:
            metrics: Dictionary of metrics
            title: Table title
        """
        print(f"\n{'='*50}")
        print(f"{title:^50}")
        print(f"{'='*50}")

        for key, value in metrics.items():
            if isinstance(value, float):
                if "ratio" in key and "aspect" not in key:
                    print(f"{key:.<40} {value:>8.2%}")
                else:
                    print(f"{key:.<40} {value:>8.4f}")
            else:
                print(f"{key:.<40} {value!s:>8}")

        print(f"{'='*50}\n")
