"""
abi_bindgen.pipeline
====================

Straight-line generation pipeline::

    JSON entries -> parse -> (per entry: canonicalize -> hash -> name)
                 -> module-wide collision check -> map types -> emit

The collision check runs over every entry before any type is mapped or any
text is emitted, and type mapping completes for every entry before
emission, so a failing run produces no output at all.

Every run is a pure function of (ABI, module name, source label, config):
no caches or registries survive it. Independent runs share no mutable state
and may execute concurrently; :func:`generate_many` does exactly that for a
batch of files, writing each output whole.

Quickstart
----------
    from abi_bindgen import generate_module

    mod = generate_module(abi, name="erc20")
    print(mod.text)
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Union

from .config import BindgenConfig
from .emitter import emit_module
from .errors import BindgenError, InvalidLabelError
from .files import atomic_write_text, load_abi_file
from .logging import context
from .model import SkippedEntry
from .naming import resolve_bindings
from .parser import parse_abi
from .typemap import MappedBinding

log = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Control characters anywhere; the name also lands inside a docstring.
_UNSAFE_SOURCE = re.compile(r"[\x00-\x1f\x7f]")
_UNSAFE_NAME = re.compile(r"[\x00-\x1f\x7f\"\\]")


@dataclass(frozen=True)
class GeneratedModule:
    """Result of one generation run."""
    name: str
    source: str
    bindings: Tuple[MappedBinding, ...]
    skipped: Tuple[SkippedEntry, ...]
    text: str

    @property
    def identifiers(self) -> List[str]:
        return [mb.binding.identifier for mb in self.bindings]


def generate_module(
    abi: Sequence[Any],
    *,
    name: str = "contract",
    source: Optional[str] = None,
    config: Optional[BindgenConfig] = None,
) -> GeneratedModule:
    """
    Generate the binding module for one decoded ABI document.

    Args:
        abi: list of ABI entry objects.
        name: interface name used in the generated docstrings.
        source: label for the header comment (defaults to ``name + ".json"``).
        config: mapper configuration; defaults to :class:`BindgenConfig` defaults
            (environment variables are *not* consulted here).

    Raises:
        BindgenError: any parse, naming or mapping failure, or
            ``InvalidLabelError`` when ``name`` or ``source`` cannot be written
            into the header. Nothing is returned or written in that case.
    """
    config = config or BindgenConfig()
    source = source or f"{name}.json"
    if not name or _UNSAFE_NAME.search(name):
        raise InvalidLabelError(field="name", value=name)
    if _UNSAFE_SOURCE.search(source):
        raise InvalidLabelError(field="source", value=source)

    parsed = parse_abi(abi)
    resolved = resolve_bindings(parsed.functions)

    mapper = config.type_mapper()
    mapped = tuple(mapper.map_binding(b) for b in resolved)

    text = emit_module(
        mapped,
        module=name,
        source=source,
        address_type=config.address_type,
        address_module=config.address_module,
    )
    log.info("generated %d bindings for %s", len(mapped), source)
    return GeneratedModule(
        name=name, source=source, bindings=mapped, skipped=parsed.skipped, text=text
    )


def generate_file(
    input_path: PathLike,
    output_path: PathLike,
    *,
    name: Optional[str] = None,
    config: Optional[BindgenConfig] = None,
) -> GeneratedModule:
    """Load ``input_path``, generate, and atomically write ``output_path``."""
    src = Path(input_path)
    with context(source=src.name):
        abi = load_abi_file(src)
        mod = generate_module(abi, name=name or src.stem, source=src.name, config=config)
        atomic_write_text(output_path, mod.text)
        log.debug("wrote %s", output_path)
    return mod


# --- Batch --------------------------------------------------------------------

@dataclass(frozen=True)
class BatchResult:
    input: Path
    output: Path
    module: Optional[GeneratedModule] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _run_job(job: Tuple[Path, Path], config: Optional[BindgenConfig]) -> BatchResult:
    input_path, output_path = job
    try:
        mod = generate_file(input_path, output_path, config=config)
    except (BindgenError, OSError) as e:
        log.error("generation failed for %s: %s", input_path.name, e)
        return BatchResult(input=input_path, output=output_path, error=e)
    return BatchResult(input=input_path, output=output_path, module=mod)


def check_distinct_outputs(jobs: Sequence[Tuple[PathLike, PathLike]]) -> None:
    """Raise ``ValueError`` if two jobs would write the same output file."""
    outputs = [Path(o).resolve() for _, o in jobs]
    if len(set(outputs)) != len(outputs):
        raise ValueError("batch jobs must write distinct output files")


def generate_many(
    jobs: Sequence[Tuple[PathLike, PathLike]],
    *,
    config: Optional[BindgenConfig] = None,
    max_workers: Optional[int] = None,
) -> List[BatchResult]:
    """
    Generate several independent ABI files concurrently.

    A failure in one file does not stop the others; each result records its
    own outcome and results are returned in ``jobs`` order. Failures are
    never retried.
    """
    check_distinct_outputs(jobs)
    norm = [(Path(i), Path(o)) for i, o in jobs]

    workers = max_workers or (config.max_workers if config else 4)
    with ThreadPoolExecutor(max_workers=max(1, workers)) as pool:
        return list(pool.map(lambda job: _run_job(job, config), norm))


__all__ = [
    "GeneratedModule",
    "BatchResult",
    "generate_module",
    "generate_file",
    "generate_many",
    "check_distinct_outputs",
]
