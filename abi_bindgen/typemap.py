"""
Type mapper
===========

Table-driven mapping from the ABI type grammar to Python annotation
expressions used in generated bindings.

=================  ==========================
ABI                Python
=================  ==========================
address            ChecksumAddress (configurable)
uintN / intN       int
bool               bool
bytes / bytesN     bytes
string             str
T[] / T[N]         Sequence[T]
(T1,...,Tn)        Tuple[T1, ..., Tn]
=================  ==========================

``fixedMxN``, ``ufixedMxN`` and ``function`` parse fine but have no entry in
the table; mapping them raises :class:`~abi_bindgen.errors.UnsupportedTypeError`
instead of emitting a best-effort guess.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence, Tuple

from .errors import UnsupportedTypeError
from .model import ARRAY, ELEMENTARY, TUPLE, AbiParam, AbiType
from .naming import ResolvedBinding, param_names
from .signature import canonical_type

DEFAULT_ADDRESS_TYPE = "ChecksumAddress"

_FAMILY_RE = re.compile(r"^(uint|int|bytes|fixed|ufixed)[0-9]")


def default_table(address_type: str = DEFAULT_ADDRESS_TYPE) -> Dict[str, str]:
    """Elementary family -> Python type expression."""
    return {
        "address": address_type,
        "bool": "bool",
        "string": "str",
        "bytes": "bytes",
        "bytesN": "bytes",
        "uint": "int",
        "int": "int",
    }


def _family(tag: str) -> str:
    m = _FAMILY_RE.match(tag)
    if m is None:
        return tag
    fam = m.group(1)
    return "bytesN" if fam == "bytes" else fam


@dataclass(frozen=True)
class MappedType:
    """A Python annotation plus the ABI type string handed to ``eth_abi``."""
    expr: str
    abi: str
    typing_names: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class MappedParam:
    name: str
    type: MappedType


@dataclass(frozen=True)
class MappedBinding:
    binding: ResolvedBinding
    inputs: Tuple[MappedParam, ...]
    outputs: Tuple[MappedType, ...]

    @property
    def typing_names(self) -> FrozenSet[str]:
        names: FrozenSet[str] = frozenset()
        for p in self.inputs:
            names |= p.type.typing_names
        for t in self.outputs:
            names |= t.typing_names
        return names


class TypeMapper:
    """
    Maps :class:`~abi_bindgen.model.AbiType` values to :class:`MappedType`.

    The mapper is stateless after construction; one instance may be shared
    by concurrent generation runs.
    """

    def __init__(self, table: Optional[Mapping[str, str]] = None) -> None:
        self._table = dict(table) if table is not None else default_table()

    @property
    def address_type(self) -> str:
        return self._table["address"]

    def map(self, t: AbiType, *, entry: Optional[str] = None, path: Optional[str] = None) -> MappedType:
        abi = canonical_type(t)
        expr, names = self._expr(t, entry=entry, path=path)
        return MappedType(expr=expr, abi=abi, typing_names=names)

    def _expr(self, t: AbiType, *, entry: Optional[str], path: Optional[str]) -> Tuple[str, FrozenSet[str]]:
        if t.kind == ELEMENTARY:
            py = self._table.get(_family(t.name))
            if py is None:
                raise UnsupportedTypeError(
                    f"no Python mapping for ABI type {t.name!r}",
                    type_string=t.name, entry=entry, path=path,
                )
            return py, frozenset()
        if t.kind == ARRAY and t.item is not None:
            inner, names = self._expr(t.item, entry=entry, path=path)
            return f"Sequence[{inner}]", names | {"Sequence"}
        if t.kind == TUPLE:
            parts: List[str] = []
            names = frozenset({"Tuple"})
            for i, c in enumerate(t.components):
                sub = f"{path}.components[{i}]" if path else f"components[{i}]"
                expr, inner_names = self._expr(c.type, entry=entry, path=sub)
                parts.append(expr)
                names |= inner_names
            return ("Tuple[" + ", ".join(parts) + "]" if parts else "Tuple[()]"), names
        raise UnsupportedTypeError(
            f"unsupported type shape {t.kind!r}", type_string=t.kind, entry=entry, path=path
        )

    def map_params(self, params: Sequence[AbiParam], field: str, *, entry: str) -> Tuple[MappedType, ...]:
        return tuple(
            self.map(p.type, entry=entry, path=f"{field}[{i}]") for i, p in enumerate(params)
        )

    def map_binding(self, binding: ResolvedBinding) -> MappedBinding:
        entry = binding.entry
        in_types = self.map_params(entry.inputs, "inputs", entry=entry.name)
        names = param_names(entry.inputs)
        return MappedBinding(
            binding=binding,
            inputs=tuple(MappedParam(name=n, type=t) for n, t in zip(names, in_types)),
            outputs=self.map_params(entry.outputs, "outputs", entry=entry.name),
        )


__all__ = [
    "DEFAULT_ADDRESS_TYPE",
    "default_table",
    "MappedType",
    "MappedParam",
    "MappedBinding",
    "TypeMapper",
]
