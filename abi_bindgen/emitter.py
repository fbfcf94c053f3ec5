"""
Code emitter
============

Renders a list of :class:`~abi_bindgen.typemap.MappedBinding` into the text
of one Python module. The emitted module contains:

- ``CallExecutor``: the protocol the runtime implements to perform the call
- ``Contract``: holds the target ``address`` and the executor, with one
  method per binding named by its selector-suffixed identifier

Each method ABI-encodes its arguments with ``eth_abi.encode`` behind the
literal selector bytes, hands the calldata to the executor (``static_call``
for view/pure, ``call`` otherwise) and decodes the returned bytes with
``eth_abi.decode``.

Output is a pure function of the bindings, the module name and the mapper
configuration: no timestamps, no versions, no dict-order or set-order
dependence. Committed golden files rely on this.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .typemap import MappedBinding, MappedType

_HEADER = '''\
# Generated by abi-bindgen from {source}. Do not edit by hand.
# Address type: {address_origin}
"""Selector-suffixed bindings for the {module} contract interface."""

from __future__ import annotations

'''

_EXECUTOR = '''

class CallExecutor(Protocol):
    """Performs the cross-contract call; supplied by the runtime."""

    def call(self, address: {address}, calldata: bytes, value: int = 0) -> bytes: ...

    def static_call(self, address: {address}, calldata: bytes) -> bytes: ...


class Contract:
    """Bindings for one deployed {module} contract."""

    def __init__(self, address: {address}, executor: CallExecutor) -> None:
        self.address = address
        self.executor = executor
'''

_FOOTER = '''

__all__ = ["CallExecutor", "Contract"]
'''


def _str_list(items: Sequence[str]) -> str:
    return "[" + ", ".join(f'"{s}"' for s in items) + "]"


def _return_annotation(outputs: Sequence[MappedType]) -> str:
    if not outputs:
        return "None"
    if len(outputs) == 1:
        return outputs[0].expr
    return "Tuple[" + ", ".join(o.expr for o in outputs) + "]"


def emit_binding(mb: MappedBinding) -> str:
    """Source of one ``Contract`` method, including its leading comment."""
    b = mb.binding
    params = "".join(f", {p.name}: {p.type.expr}" for p in mb.inputs)
    payable = b.entry.state_mutability == "payable"
    if payable:
        params += ", *, call_value: int = 0"

    lines: List[str] = [
        "",
        f"    # Original: {b.signature}",
        f"    def {b.identifier}(self{params}) -> {_return_annotation(mb.outputs)}:",
    ]

    calldata = f'bytes.fromhex("{b.selector[2:]}")'
    if mb.inputs:
        types = _str_list([p.type.abi for p in mb.inputs])
        args = "[" + ", ".join(p.name for p in mb.inputs) + "]"
        calldata += f" + encode({types}, {args})"
    lines.append(f"        calldata = {calldata}")

    if b.entry.is_read_only:
        invoke = "self.executor.static_call(self.address, calldata)"
    elif payable:
        invoke = "self.executor.call(self.address, calldata, value=call_value)"
    else:
        invoke = "self.executor.call(self.address, calldata)"

    if not mb.outputs:
        lines.append(f"        {invoke}")
    else:
        lines.append(f"        raw = {invoke}")
        decoded = f"decode({_str_list([o.abi for o in mb.outputs])}, raw)"
        lines.append(f"        return {decoded}[0]" if len(mb.outputs) == 1 else f"        return {decoded}")

    return "\n".join(lines) + "\n"


def _imports(bindings: Sequence[MappedBinding], address_module: Optional[str], address_type: str) -> str:
    typing_names = {"Protocol"}
    for mb in bindings:
        typing_names |= mb.typing_names
        if len(mb.outputs) > 1:
            typing_names.add("Tuple")

    eth_abi_names = []
    if any(mb.outputs for mb in bindings):
        eth_abi_names.append("decode")
    if any(mb.inputs for mb in bindings):
        eth_abi_names.append("encode")

    groups = [f"from typing import {', '.join(sorted(typing_names))}"]
    third_party = []
    if eth_abi_names:
        third_party.append(f"from eth_abi import {', '.join(eth_abi_names)}")
    if address_module:
        third_party.append(f"from {address_module} import {address_type}")
    if third_party:
        groups.append("\n".join(third_party))
    return "\n\n".join(groups) + "\n"


def emit_module(
    bindings: Sequence[MappedBinding],
    *,
    module: str,
    source: str,
    address_type: str,
    address_module: Optional[str],
) -> str:
    """
    Render the full module text.

    Args:
        bindings: mapped bindings in source declaration order.
        module: human name of the interface (used in docstrings).
        source: input file name shown in the header comment.
        address_type: annotation used for ``address`` values.
        address_module: module that ``address_type`` is imported from, or
            ``None`` for builtins such as ``str``.
    """
    origin = f"{address_module}.{address_type}" if address_module else address_type
    out = _HEADER.format(source=source, address_origin=origin, module=module)
    out += _imports(bindings, address_module, address_type)
    out += _EXECUTOR.format(address=address_type, module=module)
    for mb in bindings:
        out += emit_binding(mb)
    out += _FOOTER
    return out


__all__ = ["emit_binding", "emit_module"]
