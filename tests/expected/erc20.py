# Generated by abi-bindgen from erc20.json. Do not edit by hand.
# Address type: eth_typing.ChecksumAddress
"""Selector-suffixed bindings for the erc20 contract interface."""

from __future__ import annotations

from typing import Protocol

from eth_abi import decode, encode
from eth_typing import ChecksumAddress


class CallExecutor(Protocol):
    """Performs the cross-contract call; supplied by the runtime."""

    def call(self, address: ChecksumAddress, calldata: bytes, value: int = 0) -> bytes: ...

    def static_call(self, address: ChecksumAddress, calldata: bytes) -> bytes: ...


class Contract:
    """Bindings for one deployed erc20 contract."""

    def __init__(self, address: ChecksumAddress, executor: CallExecutor) -> None:
        self.address = address
        self.executor = executor

    # Original: balanceOf(address)
    def balance_of__0x70a08231(self, owner: ChecksumAddress) -> int:
        calldata = bytes.fromhex("70a08231") + encode(["address"], [owner])
        raw = self.executor.static_call(self.address, calldata)
        return decode(["uint256"], raw)[0]

    # Original: transfer(address,uint256)
    def transfer__0xa9059cbb(self, to: ChecksumAddress, value: int) -> bool:
        calldata = bytes.fromhex("a9059cbb") + encode(["address", "uint256"], [to, value])
        raw = self.executor.call(self.address, calldata)
        return decode(["bool"], raw)[0]

    # Original: approve(address,uint256)
    def approve__0x095ea7b3(self, spender: ChecksumAddress, value: int) -> bool:
        calldata = bytes.fromhex("095ea7b3") + encode(["address", "uint256"], [spender, value])
        raw = self.executor.call(self.address, calldata)
        return decode(["bool"], raw)[0]


__all__ = ["CallExecutor", "Contract"]
