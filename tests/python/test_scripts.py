from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import yaml

ROOT = Path(__file__).resolve().parents[2]


def test_write_default_config(tmp_path: Path) -> None:
    script_path = ROOT / "scripts" / "write_default_config.py"
    output = tmp_path / "nested" / "config.yaml"
    result = subprocess.run(
        [
            sys.executable,
            str(script_path),
            "--output",
            str(output),
            "--seed",
            "17",
        ],
        check=True,
        capture_output=True,
        text=True,
    )
    assert "Wrote default config" in result.stdout

    data = yaml.safe_load(output.read_text())
    assert data["seed"] == 17
    assert data["predator"]["reproduction_cost"] == 3

    again = subprocess.run(
        [sys.executable, str(script_path), "--output", str(output)],
        capture_output=True,
        text=True,
    )
    assert again.returncode != 0
    assert "FileExistsError" in again.stderr
