"""
Packing Script for potpack

Pack rectangles from a file (or randomly generated ones), report metrics
and optionally render the layout.

Usage:
    python pack_rectangles.py --input sprites.yaml --output atlas.json
    python pack_rectangles.py --random 100 --seed 7 --visualize --save-html
    python pack_rectangles.py --input sprites.json --config config/default.yaml
"""

import argparse
import json
import yaml
from pathlib import Path
from typing import List, Optional, Sequence

from potpack.packing.packer import Packer, PackingResult
from potpack.packing.rectangle import Rectangle, generate_random_rectangles
from potpack.utils.config import get_default_config, load_config, update_config_from_args
from potpack.utils.logger import setup_logger
from potpack.utils.metrics import MetricsCalculator
from potpack.visualization.plotly_2d import PackingVisualizer


def parse_args(argv: Optional[Sequence[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Pack rectangles into a near-square atlas")

    # Input
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--input",
        type=str,
        help="YAML or JSON file with a list of [width, height] pairs or {width, height} mappings",
    )
    source.add_argument(
        "--random",
        type=int,
        help="Pack this many randomly generated rectangles",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for --random (overrides config)",
    )

    # Configuration
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file (built-in defaults if not provided)",
    )
    parser.add_argument(
        "--fill-factor",
        type=float,
        default=None,
        help="Target fill used to size the starting width (overrides config)",
    )

    # Output
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write placements as JSON to this file",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Render the packed layout",
    )
    parser.add_argument(
        "--save-html",
        action="store_true",
        help="Save the visualization as HTML instead of opening it",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="outputs",
        help="Directory to save visualizations",
    )

    # Logging
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Log file path (overrides config)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level name (overrides config)",
    )

    return parser.parse_args(argv)


def load_rectangles(input_path: str) -> List[Rectangle]:
    """
    Load rectangles from a YAML or JSON file.

    Entries are either [width, height] pairs or mappings with width, height
    and optional id/label. Ids default to the entry's position.

    Args:
        input_path: Path to the rectangle list

    Returns:
        List of unplaced rectangles
    """
    input_path = Path(input_path)

    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    # JSON is a subset of YAML, so one loader covers both
    with open(input_path, "r") as f:
        entries = yaml.safe_load(f) or []

    if not isinstance(entries, list):
        raise ValueError(f"Input file must contain a list of rectangles: {input_path}")

    rectangles = []
    for idx, entry in enumerate(entries):
        if isinstance(entry, dict):
            rectangles.append(Rectangle.from_dict(entry, default_id=idx))
        elif isinstance(entry, (list, tuple)) and len(entry) == 2:
            rectangles.append(Rectangle(width=entry[0], height=entry[1], rect_id=idx))
        else:
            raise ValueError(f"Invalid rectangle entry at index {idx}: {entry!r}")

    return rectangles


def save_placements(output_path: str, rectangles: Sequence[Rectangle], result: PackingResult):
    """Write the packed bound and per-rectangle placements as JSON."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    payload = {
        "width": result.width,
        "height": result.height,
        "fill": result.fill,
        "rectangles": [rect.to_dict() for rect in rectangles],
    }

    with open(output_path, "w") as f:
        json.dump(payload, f, indent=2)


def main(argv: Optional[Sequence[str]] = None) -> PackingResult:
    """Main packing run."""
    args = parse_args(argv)

    # Load configuration
    if args.config is not None:
        config = load_config(args.config)
    else:
        config = get_default_config()
    config = update_config_from_args(config, vars(args))

    # Setup logger
    logger = setup_logger(
        "potpack",
        log_file=config["logging"]["log_file"],
        level=config["logging"]["level"],
    )
    logger.info("=" * 80)
    logger.info("potpack rectangle packing")
    logger.info("=" * 80)

    # Collect rectangles
    if args.input is not None:
        logger.info(f"Loading rectangles from: {args.input}")
        rectangles = load_rectangles(args.input)
    else:
        gen_config = config["generation"]
        logger.info(f"Generating {gen_config['n_rectangles']} random rectangles "
                    f"(seed={gen_config['seed']})")
        rectangles = generate_random_rectangles(
            gen_config["n_rectangles"],
            size_range=tuple(gen_config["size_range"]),
            seed=gen_config["seed"],
        )

    # Packing sorts in place; keep the input order for reporting
    input_order = list(rectangles)

    packer = Packer(fill_factor=config["packer"]["fill_factor"])
    width, height = packer.pack(rectangles)
    result = packer.last_result

    logger.info(f"Packed size: {width}x{height} (start width {result.start_width}, "
                f"{result.num_spaces} free spaces left)")

    metrics = MetricsCalculator.calculate_all_metrics(input_order, width, height)
    MetricsCalculator.print_metrics(metrics, "Packing Metrics")

    if metrics["num_overlaps"] or not metrics["contained"]:
        logger.error("Layout check failed: overlapping or out-of-bounds rectangles")

    if args.output is not None:
        save_placements(args.output, input_order, result)
        logger.info(f"Placements saved to: {args.output}")

    # Generate visualization
    if args.visualize:
        logger.info("Generating visualization...")
        vis_config = config["visualization"]
        visualizer = PackingVisualizer(color_scheme=vis_config["color_scheme"])
        visualizer.visualize_layout(
            input_order,
            width,
            height,
            show_labels=vis_config["show_labels"],
        )

        if args.save_html:
            html_path = Path(args.output_dir) / "layout.html"
            visualizer.save_html(str(html_path))
        else:
            visualizer.show()

    logger.info("Packing completed!")

    return result


if __name__ == "__main__":
    main()
