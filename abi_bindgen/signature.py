"""
Canonical signature builder
===========================

Renders :class:`~abi_bindgen.model.AbiType` values into the canonical type
strings used for selector hashing, e.g.::

    transfer(address,uint256)
    fill((address,uint256)[],bytes32)

Rules (Solidity ABI specification, "Function Selector"):

- elementary types render by their canonical tag (aliases already expanded)
- tuples render as ``(t1,t2,...)`` with no names and no spaces
- arrays append ``[]`` or ``[N]`` to the rendered element type
- the signature is ``name(inputs...)``; outputs never take part

Any divergence here silently corrupts every selector downstream, so the
elementary grammar is checked again at render time.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from .errors import UnknownTypeError
from .model import ARRAY, ELEMENTARY, TUPLE, AbiEntry, AbiParam, AbiType

# --- Elementary grammar -------------------------------------------------------

_ALIASES = {
    "uint": "uint256",
    "int": "int256",
    "fixed": "fixed128x18",
    "ufixed": "ufixed128x18",
}

_INT_RE = re.compile(r"^u?int(?P<bits>[0-9]+)$")
_BYTES_RE = re.compile(r"^bytes(?P<size>[0-9]+)$")
_FIXED_RE = re.compile(r"^u?fixed(?P<bits>[0-9]+)x(?P<places>[0-9]+)$")


def _valid_bits(bits: str) -> bool:
    n = int(bits)
    return not bits.startswith("0") and 8 <= n <= 256 and n % 8 == 0


def canonical_elementary(tag: str, *, entry: Optional[str] = None, path: Optional[str] = None) -> str:
    """
    Validate an elementary type tag and return its canonical spelling.

    Raises:
        UnknownTypeError: if ``tag`` is not part of the ABI type grammar.
    """
    tag = _ALIASES.get(tag, tag)
    if tag in ("address", "bool", "string", "bytes", "function"):
        return tag
    m = _INT_RE.match(tag)
    if m and _valid_bits(m.group("bits")):
        return tag
    m = _BYTES_RE.match(tag)
    if m and not m.group("size").startswith("0") and 1 <= int(m.group("size")) <= 32:
        return tag
    m = _FIXED_RE.match(tag)
    if m and _valid_bits(m.group("bits")):
        places = m.group("places")
        if (places == "0" or not places.startswith("0")) and int(places) <= 80:
            return tag
    raise UnknownTypeError(
        f"unknown type {tag!r}", entry=entry, path=path, type_string=tag
    )


# --- Rendering ----------------------------------------------------------------

def canonical_type(t: AbiType) -> str:
    """Canonical signature fragment for one type."""
    if t.kind == ELEMENTARY:
        return canonical_elementary(t.name)
    if t.kind == ARRAY:
        if t.item is None:
            raise UnknownTypeError("array type without element type")
        suffix = "[]" if t.length is None else f"[{t.length}]"
        return canonical_type(t.item) + suffix
    if t.kind == TUPLE:
        return "(" + ",".join(canonical_type(c.type) for c in t.components) + ")"
    raise UnknownTypeError(f"unknown type kind {t.kind!r}", type_string=t.kind)


def canonical_types(params: Iterable[AbiParam]) -> str:
    """Comma-joined canonical types, e.g. ``address,uint256``."""
    return ",".join(canonical_type(p.type) for p in params)


def canonical_signature(name: str, inputs: Iterable[AbiParam]) -> str:
    return f"{name}({canonical_types(inputs)})"


def entry_signature(entry: AbiEntry) -> str:
    """Canonical signature of a parsed entry (inputs only)."""
    return canonical_signature(entry.name, entry.inputs)


__all__ = [
    "canonical_elementary",
    "canonical_type",
    "canonical_types",
    "canonical_signature",
    "entry_signature",
]
