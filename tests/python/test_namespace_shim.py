import os
import subprocess
import sys
from pathlib import Path


def test_repo_imports_without_editable_install():
    repo_root = Path(__file__).resolve().parents[2]
    env = os.environ.copy()
    env.pop("PYTHONPATH", None)

    proc = subprocess.run(
        [sys.executable, "-c", "import hexprey.headless; print(hexprey.headless.__file__)"],
        cwd=repo_root,
        env=env,
        capture_output=True,
        text=True,
    )

    assert proc.returncode == 0, proc.stderr

    stdout = proc.stdout.strip().splitlines()
    stdout = stdout[-1] if stdout else ""
    assert stdout, "hexprey.headless path not printed"

    output_path = Path(stdout).resolve()
    expected_path = (repo_root / "src" / "hexprey" / "headless.py").resolve()
    assert output_path.samefile(expected_path)
