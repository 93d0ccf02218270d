#!/usr/bin/env python3
"""Write the default simulation configuration as YAML."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
src_root = ROOT / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from hexprey.sim.core.config import SimulationConfig, dump_config  # noqa: E402


def write_config(path: Path, text: str, overwrite: bool) -> None:
    if path.exists() and not overwrite:
        raise FileExistsError(f"{path} already exists. Use --overwrite to replace.")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Write the default simulation configuration as YAML.")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("configs/default.yaml"),
        help="File to write.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Override the seed in the written file.")
    parser.add_argument(
        "--overwrite", action="store_true", help="Overwrite an existing file."
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    config = SimulationConfig()
    if args.seed is not None:
        config.seed = args.seed
    write_config(args.output, dump_config(config), args.overwrite)

    print(f"Wrote default config to {args.output}")


if __name__ == "__main__":
    main()
