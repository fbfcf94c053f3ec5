"""
abi-bindgen — overload-safe Python bindings from contract ABIs
==============================================================

Turns a contract interface description (ABI JSON) into a deterministic
Python module exposing one method per function, named
``{snake_case(name)}__{selector}``:

    >>> from abi_bindgen import generate_module, function_selector
    >>> function_selector("transfer(address,uint256)")
    '0xa9059cbb'
    >>> mod = generate_module(abi, name="erc721")
    >>> mod.identifiers[:2]
    ['balance_of__0x70a08231', 'owner_of__0x6352211e']

Public surface:
- Pipeline: ``generate_module``, ``generate_file``, ``generate_many``
- Stages: ``parse_abi``, ``canonical_signature``, ``function_selector``,
  ``resolve_bindings``, ``TypeMapper``, ``emit_module``
- Config: ``BindgenConfig``
- Errors: ``BindgenError`` and subclasses
"""

from __future__ import annotations

from .config import BindgenConfig
from .emitter import emit_module
from .errors import (AbiParseError, BindgenError, DuplicateIdentifierError,
                     DuplicateSelectorError, InvalidLabelError,
                     UnknownTypeError, UnsupportedTypeError)
from .model import AbiEntry, AbiParam, AbiType, ParsedAbi
from .naming import ResolvedBinding, binding_identifier, resolve_bindings, snake_case
from .parser import parse_abi
from .pipeline import GeneratedModule, generate_file, generate_many, generate_module
from .selector import function_selector, keccak256
from .signature import canonical_signature, canonical_type
from .typemap import TypeMapper
from .version import __version__

__all__ = [
    "__version__",
    # Pipeline
    "generate_module",
    "generate_file",
    "generate_many",
    "GeneratedModule",
    # Stages
    "parse_abi",
    "canonical_signature",
    "canonical_type",
    "function_selector",
    "keccak256",
    "snake_case",
    "binding_identifier",
    "resolve_bindings",
    "ResolvedBinding",
    "TypeMapper",
    "emit_module",
    # Model
    "AbiEntry",
    "AbiParam",
    "AbiType",
    "ParsedAbi",
    # Config
    "BindgenConfig",
    # Errors
    "BindgenError",
    "AbiParseError",
    "UnknownTypeError",
    "UnsupportedTypeError",
    "DuplicateSelectorError",
    "DuplicateIdentifierError",
    "InvalidLabelError",
]
