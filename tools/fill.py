"""Run pytest and generate fixtures (EEST-style flow)."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import click

ROOT = Path(__file__).resolve().parent.parent
OUT = ROOT / "fixtures"


@click.command()
@click.option(
    "--output",
    default=str(OUT),
    envvar="FIXTURES_DIR",
    show_default=True,
    help="Directory to write fixtures into",
)
@click.option(
    "--fixture-format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    show_default=True,
)
def main(output: str, fixture_format: str) -> None:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join([str(ROOT / "src"), str(ROOT)])

    cmd = [
        sys.executable,
        "-m",
        "pytest",
        str(ROOT / "tests"),
        "-q",
        "--output",
        output,
        "--fixture-format",
        fixture_format,
    ]
    click.echo("Running: " + " ".join(cmd))
    raise SystemExit(subprocess.call(cmd, env=env, cwd=str(ROOT)))


if __name__ == "__main__":
    main()
