"""
Read transaction data from a JSON-RPC transaction object (as returned by
`eth_getTransactionByHash`) and return the relevant transaction.
"""

import logging
from dataclasses import fields
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from ethereum_types.bytes import Bytes, Bytes0
from ethereum_types.numeric import U64, U256, Uint

from txcodec.config import Config, EnvConfig
from txcodec.eth_types import Access, Address
from txcodec.exceptions import (
    TransactionHashMismatchError,
    TransactionLoadError,
    TransactionTypeError,
)
from txcodec.transactions import (
    AccessListTransaction,
    BlobTransaction,
    FeeMarketTransaction,
    LegacyTransaction,
    RecoveredTransaction,
    Transaction,
    TransactionType,
    VersionedHash,
    recover_sender,
    transaction_hash,
)
from txcodec.utils.hexadecimal import (
    hex_to_address,
    hex_to_bytes,
    hex_to_bytes32,
    hex_to_hash,
    hex_to_u64,
    hex_to_u256,
    hex_to_uint,
)

logger = logging.getLogger(__name__)

TRANSACTION_CLASSES: Dict[TransactionType, Type] = {
    TransactionType.LEGACY: LegacyTransaction,
    TransactionType.ACCESS_LIST: AccessListTransaction,
    TransactionType.FEE_MARKET: FeeMarketTransaction,
    TransactionType.BLOB: BlobTransaction,
}


def classify_fields(raw: Dict[str, Any]) -> TransactionType:
    """
    Work out the type of a transaction object from the fields it populates.

    An explicit `type` wins. Otherwise blob fields are checked first, then
    fee market fields, then a non-empty access list; anything else is a
    legacy transaction.
    """
    if raw.get("type") is not None:
        try:
            return TransactionType(int(str(raw["type"]), 16))
        except ValueError as e:
            raise TransactionTypeError(raw["type"]) from e

    if raw.get("maxFeePerBlobGas") is not None or raw.get(
        "blobVersionedHashes"
    ):
        return TransactionType.BLOB
    elif (
        raw.get("maxFeePerGas") is not None
        or raw.get("maxPriorityFeePerGas") is not None
    ):
        return TransactionType.FEE_MARKET
    elif raw.get("accessList"):
        return TransactionType.ACCESS_LIST
    else:
        return TransactionType.LEGACY


class TransactionLoad:
    """
    Class for loading transaction data from a JSON object
    """

    def __init__(self, raw: Dict[str, Any]) -> None:
        self.raw = raw

    def _get(self, *keys: str) -> Any:
        for key in keys:
            if self.raw.get(key) is not None:
                return self.raw[key]
        raise TransactionLoadError(f"missing field `{'` or `'.join(keys)}`")

    def json_to_chain_id(self) -> U64:
        """Get chain ID for the transaction."""
        return hex_to_u64(self._get("chainId"))

    def json_to_nonce(self) -> U256:
        """Get the nonce for the transaction."""
        return hex_to_u256(self._get("nonce"))

    def json_to_gas_price(self) -> Uint:
        """Get the gas price for the transaction."""
        return hex_to_uint(self._get("gasPrice"))

    def json_to_gas(self) -> Uint:
        """Get the gas limit for the transaction."""
        return hex_to_uint(self._get("gas", "gasLimit"))

    def json_to_to(self) -> Union[Bytes0, Address]:
        """Get to address for the transaction."""
        to = self.raw.get("to")
        if to is None or to in ("", "0x"):
            return Bytes0(b"")
        return hex_to_address(to)

    def json_to_value(self) -> U256:
        """Get the value of the transaction."""
        return hex_to_u256(self._get("value"))

    def json_to_data(self) -> Bytes:
        """Get the data of the transaction."""
        return hex_to_bytes(self._get("input", "data"))

    def json_to_access_list(self) -> Tuple[Access, ...]:
        """Get the access list of the transaction."""
        access_list = []
        for sublist in self.raw.get("accessList") or []:
            access_list.append(
                Access(
                    account=hex_to_address(sublist["address"]),
                    slots=tuple(
                        hex_to_bytes32(key)
                        for key in sublist.get("storageKeys", [])
                    ),
                )
            )
        return tuple(access_list)

    def json_to_max_priority_fee_per_gas(self) -> Uint:
        """Get the max priority fee per gas of the transaction."""
        return hex_to_uint(self._get("maxPriorityFeePerGas"))

    def json_to_max_fee_per_gas(self) -> Uint:
        """Get the max fee per gas of the transaction."""
        return hex_to_uint(self._get("maxFeePerGas"))

    def json_to_max_fee_per_blob_gas(self) -> U256:
        """
        Get the max fee per blob gas of the transaction.
        """
        return hex_to_u256(self._get("maxFeePerBlobGas"))

    def json_to_blob_versioned_hashes(self) -> Tuple[VersionedHash, ...]:
        """Get the blob versioned hashes of the transaction."""
        return tuple(
            hex_to_hash(blob_hash)
            for blob_hash in self.raw.get("blobVersionedHashes") or []
        )

    def json_to_v(self) -> U256:
        """Get the v value of the transaction."""
        return hex_to_u256(self._get("v"))

    def json_to_y_parity(self) -> U256:
        """Get the y parity of the transaction."""
        return hex_to_u256(self._get("yParity", "v"))

    def json_to_r(self) -> U256:
        """Get the r value of the transaction"""
        return hex_to_u256(self._get("r"))

    def json_to_s(self) -> U256:
        """Get the s value of the transaction"""
        return hex_to_u256(self._get("s"))

    def get_parameters(self, tx_cls: Type) -> List:
        """
        Extract all the transaction parameters from the json object
        """
        parameters = []
        for field in fields(tx_cls):
            parameters.append(getattr(self, f"json_to_{field.name}")())
        return parameters

    def read(self) -> Transaction:
        """Convert json transaction data to a transaction object"""
        tx_cls = TRANSACTION_CLASSES[classify_fields(self.raw)]
        try:
            return tx_cls(*self.get_parameters(tx_cls))
        except (KeyError, ValueError, OverflowError) as e:
            raise TransactionLoadError(
                f"malformed `{tx_cls.__name__}`: {e}"
            ) from e


def load_transaction(
    raw: Dict[str, Any], config: Optional[Config] = None
) -> RecoveredTransaction:
    """
    Load a JSON transaction object and recover its sender.

    A `from` field is never trusted: it is only compared with the recovered
    sender. A `hash` field is checked against the computed transaction hash
    when the configuration asks for it.
    """
    if config is None:
        config = EnvConfig()

    tx = TransactionLoad(raw).read()

    if config.verify_json_hash and raw.get("hash") is not None:
        expected = hex_to_hash(raw["hash"])
        actual = transaction_hash(tx)
        if expected != actual:
            raise TransactionHashMismatchError(expected, actual)

    sender = recover_sender(tx)
    if raw.get("from") is not None and hex_to_address(raw["from"]) != sender:
        logger.warning(
            "advertised sender %s differs from recovered sender 0x%s",
            raw["from"],
            sender.hex(),
        )

    return RecoveredTransaction(transaction=tx, sender=sender)
