from __future__ import annotations

import argparse
import sys
from pathlib import Path

from mandelbmp.config import default_render_config, load_named_render_configs
from mandelbmp.execution import run_render, run_suite


def parse_args():
    parser = argparse.ArgumentParser(description="Render the Mandelbrot set to a bitmap.")
    parser.add_argument("--config", type=str, help="Path to render YAML file")
    parser.add_argument("--suite", type=str, help="Name of a render within the YAML file")
    parser.add_argument("--list-suites", action="store_true", help="List renders in the YAML file")
    parser.add_argument("--output", type=str, help="Output bitmap (directory when rendering several)")
    parser.add_argument("--track", action="store_true", help="Log the render to MLflow")

    return parser.parse_args()


def main():
    args = parse_args()

    if (args.suite or args.list_suites) and not args.config:
        sys.exit("ERROR: --suite and --list-suites require --config")

    try:
        if args.config:
            config_path = Path(args.config)
            suites = load_named_render_configs(config_path, args.suite)

            if args.list_suites:
                for name, config in suites:
                    print(f"{name}: {config.image_size} -> {config.filename}")
                return 0

            if len(suites) == 1:
                name, config = suites[0]
                run_render(config, args.output, track=args.track, suite_name=name)
                return 0

            return run_suite(suites, args.output, track=args.track, descriptor=str(config_path))

        run_render(default_render_config(), args.output, track=args.track)
        return 0
    except (OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
