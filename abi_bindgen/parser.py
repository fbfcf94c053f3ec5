"""
ABI parser
==========

Turns an already-decoded interface description (a list of entry objects as
found in ``*.abi.json`` files) into an ordered tuple of immutable
:class:`~abi_bindgen.model.AbiEntry` values.

- Declaration order is preserved.
- Entries whose ``type`` is ``event``, ``error``, ``constructor``,
  ``fallback`` or ``receive`` are recorded as skipped, not parsed.
- A malformed *function* entry fails the whole document with
  :class:`~abi_bindgen.errors.AbiParseError` naming the entry and field;
  a type string outside the grammar fails with
  :class:`~abi_bindgen.errors.UnknownTypeError`.

The parser performs no file I/O; see :mod:`abi_bindgen.files` for loading.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .errors import AbiParseError, UnknownTypeError
from .model import (ENTRY_KINDS, MUTABILITIES, AbiEntry, AbiParam, AbiType,
                    ParsedAbi, SkippedEntry, array_of, elementary, tuple_of)
from .signature import canonical_elementary

log = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_TYPE_RE = re.compile(r"^(?P<base>[a-z][a-z0-9]*)(?P<dims>(\[[0-9]*\])*)$")
_DIM_RE = re.compile(r"\[([0-9]*)\]")


# ---------------
# Type strings
# ---------------

def _parse_dims(dims: str, *, entry: str, path: str, type_string: str) -> List[Optional[int]]:
    out: List[Optional[int]] = []
    for raw in _DIM_RE.findall(dims):
        if raw == "":
            out.append(None)
            continue
        n = int(raw)
        if n <= 0:
            raise UnknownTypeError(
                f"fixed array length must be positive in {type_string!r}",
                entry=entry, path=path, type_string=type_string,
            )
        out.append(n)
    return out


def _parse_param_type(p: Mapping[str, Any], *, entry: str, path: str) -> AbiType:
    typ = p.get("type")
    if not isinstance(typ, str) or not typ.strip():
        raise AbiParseError("parameter is missing a 'type' string", entry=entry, path=path)
    type_string = typ.strip()

    m = _TYPE_RE.match(type_string)
    if m is None:
        raise UnknownTypeError(
            f"unknown type {type_string!r}", entry=entry, path=path, type_string=type_string
        )
    base = m.group("base")
    dims = _parse_dims(m.group("dims"), entry=entry, path=path, type_string=type_string)

    components = p.get("components")
    if base == "tuple":
        if not isinstance(components, list):
            raise AbiParseError(
                "tuple type requires a 'components' list", entry=entry, path=path
            )
        fields = [
            _parse_param(c, entry=entry, path=f"{path}.components[{i}]")
            for i, c in enumerate(components)
        ]
        t = tuple_of(*fields)
    else:
        if components is not None:
            raise AbiParseError(
                f"'components' given for non-tuple type {type_string!r}", entry=entry, path=path
            )
        t = elementary(canonical_elementary(base, entry=entry, path=path))

    # T[2][] is a dynamic array of T[2]: suffixes apply left to right.
    for dim in dims:
        t = array_of(t, dim)
    return t


def _parse_param(p: Any, *, entry: str, path: str) -> AbiParam:
    if not isinstance(p, Mapping):
        raise AbiParseError("parameter must be an object", entry=entry, path=path)
    name = p.get("name") or ""
    if not isinstance(name, str):
        raise AbiParseError("parameter 'name' must be a string", entry=entry, path=path)
    return AbiParam(name=name, type=_parse_param_type(p, entry=entry, path=path))


def _parse_params(raw: Any, field: str, *, entry: str) -> Tuple[AbiParam, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise AbiParseError(f"'{field}' must be a list", entry=entry, path=field)
    return tuple(_parse_param(p, entry=entry, path=f"{field}[{i}]") for i, p in enumerate(raw))


# ---------------
# Entries
# ---------------

def _mutability(item: Mapping[str, Any], *, entry: str) -> str:
    if "stateMutability" in item:
        mut = item["stateMutability"]
        if mut not in MUTABILITIES:
            raise AbiParseError(
                f"invalid stateMutability {mut!r}", entry=entry, path="stateMutability"
            )
        return str(mut)
    # Pre-0.4.16 ABIs only carry the legacy flags.
    if item.get("payable") is True:
        return "payable"
    if item.get("constant") is True:
        return "view"
    return "nonpayable"


def _parse_function(item: Mapping[str, Any], index: int) -> AbiEntry:
    name = item.get("name")
    if not isinstance(name, str) or not name:
        raise AbiParseError("function entry is missing 'name'", entry=f"#{index}", path="name")
    if not _IDENTIFIER_RE.match(name):
        raise AbiParseError(f"invalid function name {name!r}", entry=f"#{index}", path="name")

    return AbiEntry(
        name=name,
        inputs=_parse_params(item.get("inputs"), "inputs", entry=name),
        outputs=_parse_params(item.get("outputs"), "outputs", entry=name),
        state_mutability=_mutability(item, entry=name),
        index=index,
    )


def parse_abi(abi: Sequence[Any]) -> ParsedAbi:
    """
    Parse a decoded ABI document.

    Args:
        abi: list of entry objects (as produced by ``json.load``).

    Returns:
        ParsedAbi with function entries in declaration order and a record of
        the non-function entries that were skipped.

    Raises:
        AbiParseError: malformed document or function entry.
        UnknownTypeError: a parameter type outside the ABI grammar.
    """
    if not isinstance(abi, list):
        raise AbiParseError(f"ABI must be a list of entries, got {type(abi).__name__}")

    functions: List[AbiEntry] = []
    skipped: List[SkippedEntry] = []
    for index, item in enumerate(abi):
        if not isinstance(item, Mapping):
            raise AbiParseError("ABI entry must be an object", entry=f"#{index}")
        kind = item.get("type", "function")
        if kind not in ENTRY_KINDS:
            raise AbiParseError(f"unknown entry type {kind!r}", entry=f"#{index}", path="type")
        if kind != "function":
            name = item.get("name") if isinstance(item.get("name"), str) else None
            skipped.append(SkippedEntry(index=index, kind=kind, name=name))
            log.debug("skipping %s entry #%d (%s)", kind, index, name or "-")
            continue
        functions.append(_parse_function(item, index))

    log.debug("parsed %d function entries, skipped %d", len(functions), len(skipped))
    return ParsedAbi(functions=tuple(functions), skipped=tuple(skipped))


__all__ = ["parse_abi"]
