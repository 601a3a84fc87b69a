"""Subprocess determinism test: ``path2enum compile --ci`` produces byte-identical output."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]


def _run(cmd: list[str], *, cwd: Path) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["PYTHONHASHSEED"] = "0"
    env["PYTHONPATH"] = str(REPO_ROOT / "src")
    return subprocess.run(cmd, cwd=str(cwd), env=env, text=True, capture_output=True)


def _compile_cmd(out: Path, fmt: str) -> list[str]:
    return [
        sys.executable,
        "-m",
        "path2enum",
        "compile",
        "--root",
        "assets",
        "--ext",
        "svg,toml",
        "--format",
        fmt,
        "--out",
        str(out),
        "--ci",
    ]


def test_cli_compile_is_byte_deterministic_under_ci(tmp_path: Path) -> None:
    """Runs ``compile --ci`` twice per format and asserts byte-identical files."""

    fixture = REPO_ROOT / "tests" / "fixtures" / "assets"
    work = tmp_path / "repo"
    shutil.copytree(fixture, work / "assets")

    for fmt, suffix in (("json", "json"), ("python", "py")):
        out_a = Path("artifacts") / f"run_a.{suffix}"
        out_b = Path("artifacts") / f"run_b.{suffix}"

        r1 = _run(_compile_cmd(out_a, fmt), cwd=work)
        assert r1.returncode == 0, (r1.stdout, r1.stderr)
        r2 = _run(_compile_cmd(out_b, fmt), cwd=work)
        assert r2.returncode == 0, (r2.stdout, r2.stderr)

        assert (work / out_a).read_bytes() == (work / out_b).read_bytes()
