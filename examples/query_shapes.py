#!/usr/bin/env python3
"""Run batch queries against a set of mixed-precision shapes.

This script builds a shape set (from a JSON file or a random scatter of
boxes and spheres in every precision), then runs a point query, a box
query, a segment query and a batch of closest-hit rays against it.

Usage:
    python -m examples.query_shapes [options]

Options:
    --shapes COUNT      Number of random shapes (default: 200)
    --rays COUNT        Number of closest-hit rays (default: 1024)
    --config PATH       Load shapes from a JSON file instead
    --save PATH         Write the shape set to a JSON file
    --seed SEED         Random seed (default: 0)
    --arch ARCH         Taichi backend: auto, cpu or gpu (default: auto)
    --verbose           Enable debug logging

Example:
    python -m examples.query_shapes --shapes 500 --rays 2048 --save shapes.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

import numpy as np
import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Run batch queries against mixed-precision shapes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--shapes",
        type=int,
        default=200,
        help="Number of random shapes (default: 200)",
    )
    parser.add_argument(
        "--rays",
        type=int,
        default=1024,
        help="Number of closest-hit rays (default: 1024)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Load shapes from a JSON file instead of generating them",
    )
    parser.add_argument(
        "--save",
        type=str,
        default=None,
        help="Write the shape set to a JSON file",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Random seed (default: 0)",
    )
    parser.add_argument(
        "--arch",
        choices=["auto", "cpu", "gpu"],
        default="auto",
        help="Taichi backend (default: auto, GPU with CPU fallback)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args()


def populate_random(shapes, count: int, rng: np.random.Generator) -> None:
    """Scatter boxes and spheres of every precision inside [-50, 50]^3."""
    for i in range(count):
        center = rng.uniform(-50.0, 50.0, size=3)
        size = rng.uniform(0.5, 5.0)
        choice = i % 4
        if choice == 0:
            lo = np.floor(center)
            shapes.add_aabb(tuple(lo), tuple(lo + np.ceil(size)), precision="i32")
        elif choice == 1:
            shapes.add_aabb(tuple(center - size), tuple(center + size), precision="f32")
        elif choice == 2:
            shapes.add_sphere(tuple(center), size, precision="f32")
        else:
            shapes.add_sphere(tuple(center), size, precision="f64")


def run_queries(shapes, num_rays: int, rng: np.random.Generator) -> None:
    """Run every query type once and print a summary."""
    start = time.perf_counter()
    inside = shapes.find_containing((0.0, 0.0, 0.0))
    print(f"Shapes containing the origin: {inside}")

    overlapping = shapes.find_intersecting_aabb((-10.0, -10.0, -10.0), (10.0, 10.0, 10.0))
    print(f"Shapes overlapping [-10, 10]^3: {len(overlapping)}")

    crossed = shapes.find_crossed_by_segment((-50.0, 0.0, 0.0), (50.0, 0.0, 0.0))
    print(f"Shapes touched by the x-axis segment: {len(crossed)}")
    for index, code in crossed[:5]:
        print(f"  shape {index}: {code.name}")

    from src.primitives.scene.store import query_closest

    origins = np.zeros((num_rays, 3))
    directions = rng.normal(size=(num_rays, 3))
    indices, t = query_closest(origins, directions)
    hit_count = int((indices >= 0).sum())
    print(f"Rays from the origin hitting a shape: {hit_count} of {num_rays}")
    if hit_count:
        print(f"  nearest hit at t = {t[indices >= 0].min():.4f}")

    print(f"Total query time: {time.perf_counter() - start:.3f}s")


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    # Initialize Taichi
    # Use GPU if available, fall back to CPU
    if args.arch == "cpu":
        ti.init(arch=ti.cpu)
    elif args.arch == "gpu":
        ti.init(arch=ti.gpu)
    else:
        try:
            ti.init(arch=ti.gpu)
            print("Using GPU backend")
        except Exception:
            ti.init(arch=ti.cpu)
            print("Using CPU backend")

    # Import after ti.init() so the store's fields land on the chosen backend
    from src.primitives.scene.manager import ShapeSet

    try:
        shapes = ShapeSet()
        rng = np.random.default_rng(args.seed)
        if args.config:
            shapes.from_dict(json.loads(Path(args.config).read_text()))
        else:
            populate_random(shapes, args.shapes, rng)
        print(f"Loaded {len(shapes)} shapes")

        run_queries(shapes, args.rays, rng)

        if args.save:
            Path(args.save).write_text(json.dumps(shapes.to_dict(), indent=2))
            print(f"Saved to: {Path(args.save).absolute()}")
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
