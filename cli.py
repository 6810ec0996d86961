"""Minimal CLI for generating and exporting roads.

Usage examples:
  python3 cli.py generate --size 50 --seed 123 --json builds/road.json --summary
  python3 cli.py generate --size 100 --count 100 --out-dir out
  python3 cli.py config
"""

import argparse
from pathlib import Path
from typing import List

from config import check_config, config
from roadgen.batch import generate_json_roads, generate_road
from roadgen.errors import ConstructionError, GenerationExhaustedError
from roadgen.faces import Face
from roadgen.io import save_faces_to_json
from roadgen.mesh import road_metrics


def _print_summary(faces: List[Face], attempts: int):
    metrics = road_metrics(faces)
    print(
        f"Segments: {metrics['segment_count']}"
        f" | Quads: {metrics['quads']}"
        f" | Turns: {metrics['turns']}"
        f" | Slopes: {metrics['slopes']}"
        f" | Attempts: {attempts}"
    )
    print(
        f"Bounds: min{metrics['bounds_min']} max{metrics['bounds_max']}"
        f" | Surface area: {metrics['surface_area']}"
    )


def _generate(args) -> int:
    max_attempts = args.max_attempts if args.max_attempts is not None else config.MAX_ATTEMPTS
    verbose = args.verbose or config.VERBOSE

    if args.count > 1 or args.json is None:
        out_dir = args.out_dir if args.out_dir is not None else config.OUTPUT_DIR
        try:
            generate_json_roads(
                args.count,
                args.size,
                str(out_dir),
                linearity=args.linearity,
                altitude_variation=args.altitude_variation,
                seed=args.seed,
                max_attempts=max_attempts,
                verbose=verbose,
            )
        except (ConstructionError, GenerationExhaustedError) as e:
            print(f"Error: {e}")
            return 1
        return 0

    try:
        faces, attempts = generate_road(
            args.size,
            args.linearity,
            args.altitude_variation,
            seed=args.seed,
            max_attempts=max_attempts,
            verbose=verbose,
        )
    except (ConstructionError, GenerationExhaustedError) as e:
        print(f"Error: {e}")
        return 1

    args.json.parent.mkdir(parents=True, exist_ok=True)
    save_faces_to_json(faces, str(args.json))
    if args.summary:
        _print_summary(faces, attempts)
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="RoadGen CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate road(s) and save them as JSON face lists")
    gen.add_argument("--size", type=int, default=config.DEFAULT_SIZE, help="Lattice side and road length")
    gen.add_argument("--linearity", type=int, default=config.DEFAULT_LINEARITY, help="Straight-ahead weight")
    gen.add_argument(
        "--altitude-variation",
        type=int,
        default=config.DEFAULT_ALTITUDE_VARIATION,
        help="Weight of each climb option",
    )
    gen.add_argument("--count", type=int, default=config.DEFAULT_COUNT, help="Number of roads to write")
    gen.add_argument("--max-attempts", type=int, default=None, help="Attempts per road before giving up (0 = never)")
    gen.add_argument("--seed", type=int, default=None)
    gen.add_argument("--out-dir", type=Path, help="Directory for batch output (road_<i>.json)")
    gen.add_argument("--json", type=Path, help="Save a single road to this path")
    gen.add_argument("--summary", action="store_true", help="Print segment counts and bounds")
    gen.add_argument("--verbose", action="store_true", help="Print retries")

    sub.add_parser("config", help="Print the configuration summary")

    args = parser.parse_args(argv)

    if args.command == "config":
        print(config.get_summary())
        return 1 if check_config() else 0

    if args.command == "generate":
        return _generate(args)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
