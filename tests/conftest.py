"""Pytest hooks to generate fixtures (EEST-style)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

import pytest

from escrow_spec.custody import CustodyService
from escrow_spec.state_digest import compute_state_digest
from escrow_spec.state_transition import TransitionResult, apply_instruction
from escrow_spec.types import AccountRef
from tools.fixtures_io import accounts_to_json
from tools.yaml_dump import write_yaml

InstructionOutcome = tuple[list[AccountRef], TransitionResult]

_INSTRUCTION_CASES: dict[str, list[dict[str, Any]]] = {}
_VECTOR_CASES: dict[str, list[dict[str, Any]]] = {}


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--output",
        action="store",
        default=None,
        help="Output directory for generated fixtures",
    )
    parser.addoption(
        "--fixture-format",
        action="store",
        default="json",
        choices=("json", "yaml"),
        help="Serialization format for generated fixtures",
    )


@pytest.fixture
def instruction_test_group() -> Callable[..., InstructionOutcome]:
    """Run an instruction, collect it as a fixture case and return the outcome."""

    def _instruction_test_group(
        rel_path: str,
        name: str,
        program_id: bytes,
        accounts: Sequence[AccountRef],
        instruction_data: bytes,
        custody: Optional[CustodyService] = None,
    ) -> InstructionOutcome:
        pre_accounts = accounts_to_json(list(accounts))
        post_accounts, result = apply_instruction(program_id, accounts, instruction_data, custody)
        post_json = accounts_to_json(post_accounts)
        _INSTRUCTION_CASES.setdefault(rel_path, []).append(
            {
                "name": name,
                "replayable": custody is None,
                "program_id": program_id.hex(),
                "pre_accounts": pre_accounts,
                "instruction_data": bytes(instruction_data).hex(),
                "expected": {
                    "ok": result.ok,
                    "error": result.error.code.name if result.error else None,
                    "state_digest": compute_state_digest(post_json),
                    "post_accounts": post_json,
                },
            }
        )
        return post_accounts, result

    return _instruction_test_group


@pytest.fixture
def vector_test_group() -> Callable[[str, dict[str, Any]], None]:
    """Collect pre-built test_vectors under a specific fixture path."""

    def _vector_test_group(rel_path: str, vector: dict[str, Any]) -> None:
        _VECTOR_CASES.setdefault(rel_path, []).append(vector)

    return _vector_test_group


def _write(target: Path, payload: dict[str, Any], fmt: str) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "yaml":
        write_yaml(target.with_suffix(".yaml"), payload)
    else:
        target.write_text(json.dumps(payload, indent=2))


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    output_dir = session.config.getoption("--output")
    if not output_dir:
        return
    fmt = session.config.getoption("--fixture-format")

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    for rel_path, cases in _INSTRUCTION_CASES.items():
        if cases:
            _write(out / rel_path, {"cases": cases}, fmt)

    for rel_path, vectors in _VECTOR_CASES.items():
        if vectors:
            _write(out / rel_path, {"test_vectors": vectors}, fmt)
