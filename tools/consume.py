"""Consume fixtures and validate them against the Python spec."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT / "tools"))

from escrow_spec.state_digest import compute_state_digest  # noqa: E402
from escrow_spec.state_transition import apply_instruction  # noqa: E402
from fixtures_io import accounts_from_json, accounts_to_json  # noqa: E402
from yaml_dump import read_yaml  # noqa: E402

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def _load(path: Path) -> dict:
    if path.suffix in (".yaml", ".yml"):
        return read_yaml(path)
    return json.loads(path.read_text())


def check_cases(path: Path) -> list[str]:
    failures: list[str] = []
    data = _load(path)

    for case in data.get("cases", []):
        name = case["name"]
        if not case.get("replayable", True):
            logger.debug(f"  [SKIP] {name} (needs an injected custody service)")
            continue
        pre_accounts = accounts_from_json(case["pre_accounts"])
        program_id = bytes.fromhex(case["program_id"])
        instruction_data = bytes.fromhex(case["instruction_data"])
        post_accounts, result = apply_instruction(program_id, pre_accounts, instruction_data)

        expected = case["expected"]
        if result.ok != expected["ok"]:
            failures.append(f"{name}: ok_mismatch")
            continue

        actual_err = result.error.code.name if result.error else None
        if actual_err != expected["error"]:
            failures.append(f"{name}: error_mismatch ({actual_err} != {expected['error']})")
            continue

        digest = compute_state_digest(accounts_to_json(post_accounts))
        if digest != expected["state_digest"]:
            failures.append(f"{name}: state_digest_mismatch")
            continue

        logger.debug(f"  [PASS] {name}")

    return failures


@click.command()
@click.option(
    "--fixtures",
    "fixtures_dir",
    default=str(ROOT / "fixtures"),
    envvar="FIXTURES_DIR",
    show_default=True,
    help="Directory containing filled fixtures",
)
@click.option("--verbose", "-v", is_flag=True, envvar="VERBOSE", help="Log every case")
def main(fixtures_dir: str, verbose: bool) -> None:
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    root = Path(fixtures_dir)
    files = sorted(
        p for p in root.rglob("*") if p.suffix in (".json", ".yaml", ".yml")
    )
    if not files:
        logger.error(f"No fixture files found in {root}")
        raise SystemExit(1)

    logger.info(f"Found {len(files)} fixture files")
    failures: list[str] = []
    for path in files:
        logger.info(f"Checking {path.relative_to(root)}")
        failures.extend(check_cases(path))

    if failures:
        for f in failures:
            logger.error(f"FAIL {f}")
        raise SystemExit(1)

    logger.info("All fixtures passed")


if __name__ == "__main__":
    main()
