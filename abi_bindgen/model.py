from __future__ import annotations

"""
ABI data model
==============

Immutable dataclasses describing a parsed interface description. Instances
are produced by :func:`abi_bindgen.parser.parse_abi` and consumed by every
later stage of the pipeline.

The recursive type grammar is a single tagged variant, :class:`AbiType`:

- ``"elementary"``: ``name`` holds the canonical tag (``uint256``, ``address``...)
- ``"array"``: ``item`` is the element type, ``length`` is ``None`` for ``T[]``
- ``"tuple"``: ``components`` is the ordered field list (each an :class:`AbiParam`)

Canonicalization and type mapping are plain functions that recurse over
``kind``; the dataclasses themselves carry no behaviour beyond construction.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

ELEMENTARY = "elementary"
ARRAY = "array"
TUPLE = "tuple"

ENTRY_KINDS = ("function", "event", "error", "constructor", "fallback", "receive")
MUTABILITIES = ("pure", "view", "nonpayable", "payable")


# -----------------
# Core type system
# -----------------

@dataclass(frozen=True)
class AbiType:
    kind: str
    name: str = ""
    item: Optional["AbiType"] = None
    length: Optional[int] = None
    components: Tuple["AbiParam", ...] = ()


@dataclass(frozen=True)
class AbiParam:
    """Parameter (or tuple component); ``name`` may be empty."""
    name: str
    type: AbiType


def elementary(name: str) -> AbiType:
    return AbiType(kind=ELEMENTARY, name=name)


def array_of(item: AbiType, length: Optional[int] = None) -> AbiType:
    return AbiType(kind=ARRAY, item=item, length=length)


def tuple_of(*components: AbiParam) -> AbiType:
    return AbiType(kind=TUPLE, components=tuple(components))


# ---------------
# ABI components
# ---------------

@dataclass(frozen=True)
class AbiEntry:
    """One function entry of the ABI, in source declaration order."""
    name: str
    inputs: Tuple[AbiParam, ...] = ()
    outputs: Tuple[AbiParam, ...] = ()
    state_mutability: str = "nonpayable"  # "pure" | "view" | "nonpayable" | "payable"
    index: int = 0                        # position in the source document
    kind: str = "function"

    @property
    def is_read_only(self) -> bool:
        return self.state_mutability in ("view", "pure")


@dataclass(frozen=True)
class SkippedEntry:
    """A non-function entry that was recognised but does not take part in generation."""
    index: int
    kind: str
    name: Optional[str] = None


@dataclass(frozen=True)
class ParsedAbi:
    functions: Tuple[AbiEntry, ...] = ()
    skipped: Tuple[SkippedEntry, ...] = field(default_factory=tuple)


__all__ = [
    "ELEMENTARY",
    "ARRAY",
    "TUPLE",
    "ENTRY_KINDS",
    "MUTABILITIES",
    "AbiType",
    "AbiParam",
    "AbiEntry",
    "SkippedEntry",
    "ParsedAbi",
    "elementary",
    "array_of",
    "tuple_of",
]
