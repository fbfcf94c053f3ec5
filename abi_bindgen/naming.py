"""
Naming & collision resolver
===========================

Every binding is named ``{snake_case(name)}__{selector}``, for example::

    balanceOf(address)                              -> balance_of__0x70a08231
    safeTransferFrom(address,address,uint256)       -> safe_transfer_from__0x42842e0e
    safeTransferFrom(address,address,uint256,bytes) -> safe_transfer_from__0xb88d4fde

The selector suffix makes overloads distinct without any overload support in
the generated code. Uniqueness is still *checked*, not assumed:
:func:`resolve_bindings` builds two finite maps for one module run
(selector -> signature and identifier -> signature) and fails on the first
clash. Both maps are local to the call and discarded afterwards.

Casing transform (stable; changing it changes every committed binding):

1. split before an uppercase letter that starts a capitalised word
   (``ERC20Transfer`` -> ``ERC20_Transfer``)
2. split between a lowercase letter or digit and an uppercase letter
   (``balanceOf`` -> ``balance_Of``)
3. lowercase, map characters outside ``[a-z0-9_]`` to ``_``, collapse runs of ``_``
4. if the result is a Python keyword from :data:`PY_KEYWORDS`, append ``_``
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from .errors import DuplicateIdentifierError, DuplicateSelectorError
from .model import AbiEntry, AbiParam
from .selector import function_selector
from .signature import entry_signature

log = logging.getLogger(__name__)

# Python 3.12 hard keywords, fixed independently of the running interpreter.
PY_KEYWORDS = frozenset({
    "False", "None", "True", "and", "as", "assert", "async", "await", "break",
    "class", "continue", "def", "del", "elif", "else", "except", "finally",
    "for", "from", "global", "if", "import", "in", "is", "lambda", "nonlocal",
    "not", "or", "pass", "raise", "return", "try", "while", "with", "yield",
})

# Names the emitted method body binds or reads; a parameter must not shadow them.
BINDING_LOCALS = frozenset({"self", "calldata", "raw", "call_value", "encode", "decode", "bytes"})

SEPARATOR = "__"

_WORD_RE = re.compile(r"(.)([A-Z][a-z]+)")
_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")
_NON_ID_CHAR = re.compile(r"[^A-Za-z0-9_]")
_UNDERSCORES = re.compile(r"_+")


def snake_case(name: str) -> str:
    """Case-boundary based lower snake_case with keyword escaping."""
    s = _WORD_RE.sub(r"\1_\2", name)
    s = _BOUNDARY_RE.sub(r"\1_\2", s).lower()
    s = _NON_ID_CHAR.sub("_", s)
    s = _UNDERSCORES.sub("_", s)
    if s in PY_KEYWORDS:
        s += "_"
    return s


def binding_identifier(name: str, selector: str) -> str:
    return f"{snake_case(name)}{SEPARATOR}{selector}"


def split_identifier(identifier: str) -> Tuple[str, str]:
    """Inverse of :func:`binding_identifier`: ``(base, selector)``."""
    base, sep, hex_part = identifier.rpartition(SEPARATOR + "0x")
    if not sep:
        raise ValueError(f"not a binding identifier: {identifier!r}")
    return base, "0x" + hex_part


def param_names(params: Sequence[AbiParam]) -> List[str]:
    """
    Python parameter names for a function's inputs.

    ABI spelling is kept (``tokenId`` stays ``tokenId``); unnamed parameters
    become ``arg{i}``; keywords and :data:`BINDING_LOCALS` get a trailing
    ``_``; a name already taken gets ``_{i}`` until it is free.
    """
    out: List[str] = []
    for i, p in enumerate(params):
        name = _NON_ID_CHAR.sub("_", p.name) if p.name else f"arg{i}"
        if name[0].isdigit():
            name = "_" + name
        if name in PY_KEYWORDS or name in BINDING_LOCALS:
            name += "_"
        while name in out:
            name = f"{name}_{i}"
        out.append(name)
    return out


# --- Resolution ---------------------------------------------------------------

@dataclass(frozen=True)
class ResolvedBinding:
    """An entry with its canonical signature, selector and binding name."""
    entry: AbiEntry
    signature: str
    selector: str
    identifier: str


def resolve_bindings(
    entries: Iterable[AbiEntry],
    *,
    selector_fn: Callable[[str], str] = function_selector,
    identifier_fn: Callable[[str, str], str] = binding_identifier,
) -> Tuple[ResolvedBinding, ...]:
    """
    Canonicalize, hash and name every entry, then verify module-wide uniqueness.

    Must run over *all* entries of a module before any code is emitted.

    Raises:
        DuplicateSelectorError: two signatures (or one signature declared
            twice) share a selector.
        DuplicateIdentifierError: the naming transform produced a clash
            despite distinct selectors.
    """
    by_selector: Dict[str, str] = {}
    by_identifier: Dict[str, str] = {}
    out: List[ResolvedBinding] = []

    for entry in entries:
        signature = entry_signature(entry)
        selector = selector_fn(signature)
        if selector in by_selector:
            raise DuplicateSelectorError(
                selector=selector, first=by_selector[selector], second=signature, entry=entry.name
            )
        identifier = identifier_fn(entry.name, selector)
        if identifier in by_identifier:
            raise DuplicateIdentifierError(
                identifier=identifier, first=by_identifier[identifier], second=signature,
                entry=entry.name,
            )
        by_selector[selector] = signature
        by_identifier[identifier] = signature
        log.debug("%s -> %s", signature, identifier)
        out.append(ResolvedBinding(entry=entry, signature=signature, selector=selector, identifier=identifier))

    return tuple(out)


__all__ = [
    "PY_KEYWORDS",
    "BINDING_LOCALS",
    "SEPARATOR",
    "snake_case",
    "binding_identifier",
    "split_identifier",
    "param_names",
    "ResolvedBinding",
    "resolve_bindings",
]
