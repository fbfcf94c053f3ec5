"""
Shared pytest fixtures:
- Paths to the committed ABI fixtures and golden outputs
- A loader for fixture ABIs
- A clean ABI_BINDGEN_* environment for every test
- A recording call executor for exercising generated modules
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

import pytest

from abi_bindgen.files import load_abi_file

ROOT = Path(__file__).resolve().parent.parent
ABIS_DIR = ROOT / "abis"
EXPECTED_DIR = Path(__file__).resolve().parent / "expected"

FIXTURE_NAMES = ("erc20", "erc721", "erc1155", "ierc165")


# ---------- ENVIRONMENT ----------

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests never inherit ABI_BINDGEN_* settings from the developer's shell."""
    for key in list(os.environ):
        if key.startswith("ABI_BINDGEN_") and key != "ABI_BINDGEN_UPDATE_GOLDEN":
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers the CLI installed on the package logger."""
    yield
    logger = logging.getLogger("abi_bindgen")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


# ---------- FIXTURE FILES ----------

@pytest.fixture(scope="session")
def abis_dir() -> Path:
    return ABIS_DIR


@pytest.fixture(scope="session")
def expected_dir() -> Path:
    return EXPECTED_DIR


@pytest.fixture(scope="session")
def load_abi() -> Callable[[str], List[Any]]:
    def _load(name: str) -> List[Any]:
        return load_abi_file(ABIS_DIR / f"{name}.json")
    return _load


def fn(name: str, inputs: Optional[List[Dict[str, Any]]] = None,
       outputs: Optional[List[Dict[str, Any]]] = None, mutability: str = "nonpayable") -> Dict[str, Any]:
    """Build a function ABI entry."""
    return {
        "type": "function",
        "name": name,
        "inputs": inputs or [],
        "outputs": outputs or [],
        "stateMutability": mutability,
    }


def param(type_: str, name: str = "", **extra: Any) -> Dict[str, Any]:
    d: Dict[str, Any] = {"name": name, "type": type_}
    d.update(extra)
    return d


# ---------- FAKE EXECUTOR ----------

class RecordingExecutor:
    """
    Stands in for the runtime: records every call and answers with a
    pre-encoded return payload.
    """

    def __init__(self, response: bytes = b"") -> None:
        self.response = response
        self.calls: List[Tuple[str, str, bytes, int]] = []

    def call(self, address: str, calldata: bytes, value: int = 0) -> bytes:
        self.calls.append(("call", address, calldata, value))
        return self.response

    def static_call(self, address: str, calldata: bytes) -> bytes:
        self.calls.append(("static_call", address, calldata, 0))
        return self.response


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()
