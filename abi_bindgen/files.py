"""
File helpers for the front-end: reading ABI documents and writing generated
modules.

Generated files are written atomically (temp file in the target directory,
then ``os.replace``) so a failed or concurrent run can never leave a partial
or interleaved module behind.
"""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any, List, Union

from .errors import AbiParseError

PathLike = Union[str, Path]


def load_abi_file(path: PathLike) -> List[Any]:
    """
    Read and decode an ABI JSON file.

    Accepts either a bare entry list or a build artifact of the form
    ``{"abi": [...], ...}`` (Hardhat / Foundry output).
    """
    p = Path(path)
    try:
        with p.open("r", encoding="utf-8") as f:
            doc = json.load(f)
    except json.JSONDecodeError as e:
        raise AbiParseError(f"{p.name}: invalid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise AbiParseError(f"{p.name}: not UTF-8: {e}") from e
    if isinstance(doc, dict) and isinstance(doc.get("abi"), list):
        return doc["abi"]
    if not isinstance(doc, list):
        raise AbiParseError(f"{p.name}: expected a JSON array of ABI entries")
    return doc


def atomic_write_text(path: PathLike, text: str, *, mode: int = 0o644) -> Path:
    """
    Atomically write ``text`` (UTF-8, ``\\n`` newlines) to ``path``.

    Ensures the parent directory exists. Returns the absolute path written.
    """
    target = Path(path).expanduser().resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmpname = tempfile.mkstemp(prefix=".tmp.", suffix=".py", dir=str(target.parent))
    tmp = Path(tmpname)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        with contextlib.suppress(OSError):
            os.chmod(tmp, mode)
        os.replace(str(tmp), str(target))
    finally:
        # If replace failed, ensure temp file is gone
        if tmp.exists():
            with contextlib.suppress(OSError):
                tmp.unlink()
    return target


__all__ = ["load_abi_file", "atomic_write_text"]
