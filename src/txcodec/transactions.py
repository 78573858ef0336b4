"""
Transactions are atomic units of work created externally to Ethereum and
submitted to be executed. This module maps between their wire encoding and
typed records, computes the hash each signature covers, recovers the sender,
and computes the transaction hash.

Three layouts are supported:

- legacy transactions, a bare RLP list, signed either in the original
  Frontier manner or with the chain id folded into `v` ([EIP-155]);
- access list transactions, type `0x01` ([EIP-2930]);
- fee market transactions, type `0x02` ([EIP-1559]).

Blob transactions, type `0x03` ([EIP-4844]), can be represented but are
rejected by every operation.

[EIP-155]: https://eips.ethereum.org/EIPS/eip-155
[EIP-2930]: https://eips.ethereum.org/EIPS/eip-2930
[EIP-1559]: https://eips.ethereum.org/EIPS/eip-1559
[EIP-4844]: https://eips.ethereum.org/EIPS/eip-4844
"""

import enum
import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple, Type, TypeVar, Union

from ethereum_types.bytes import Bytes, Bytes0, FixedBytes
from ethereum_types.frozen import slotted_freezable
from ethereum_types.numeric import U64, U256, Uint

from . import rlp
from .crypto.elliptic_curve import (
    SECP256K1N,
    SECP256K1N_HALF,
    secp256k1_recover,
    secp256k1_sign,
)
from .crypto.hash import Hash32, keccak256
from .eth_types import Access, Address, StorageKey
from .exceptions import (
    InvalidSignatureError,
    InvalidSignatureSError,
    RLPDecodingError,
    SignatureRecoveryError,
    TransactionTypeError,
    UnexpectedListLengthError,
)
from .rlp import RLPItem
from .rlp.reader import LIST_OFFSET

logger = logging.getLogger(__name__)

VersionedHash = Hash32

B = TypeVar("B", bound=FixedBytes)


class TransactionType(enum.Enum):
    """
    [EIP-2718] type of a transaction. Legacy transactions carry no type byte
    on the wire and are numbered zero.

    [EIP-2718]: https://eips.ethereum.org/EIPS/eip-2718
    """

    LEGACY = 0
    ACCESS_LIST = 1
    FEE_MARKET = 2
    BLOB = 3


LEGACY_FIELD_COUNT = 9
ACCESS_LIST_FIELD_COUNT = 11
FEE_MARKET_FIELD_COUNT = 12


@slotted_freezable
@dataclass
class LegacyTransaction:
    """
    Atomic operation performed on the block chain.
    """

    nonce: U256
    gas_price: Uint
    gas: Uint
    to: Union[Bytes0, Address]
    value: U256
    data: Bytes
    v: U256
    r: U256
    s: U256


@slotted_freezable
@dataclass
class AccessListTransaction:
    """
    The transaction type added in EIP-2930 to support access lists.
    """

    chain_id: U64
    nonce: U256
    gas_price: Uint
    gas: Uint
    to: Union[Bytes0, Address]
    value: U256
    data: Bytes
    access_list: Tuple[Access, ...]
    y_parity: U256
    r: U256
    s: U256


@slotted_freezable
@dataclass
class FeeMarketTransaction:
    """
    The transaction type added in EIP-1559.
    """

    chain_id: U64
    nonce: U256
    max_priority_fee_per_gas: Uint
    max_fee_per_gas: Uint
    gas: Uint
    to: Union[Bytes0, Address]
    value: U256
    data: Bytes
    access_list: Tuple[Access, ...]
    y_parity: U256
    r: U256
    s: U256


@slotted_freezable
@dataclass
class BlobTransaction:
    """
    The transaction type added in EIP-4844. Not supported by this codec.
    """

    chain_id: U64
    nonce: U256
    max_priority_fee_per_gas: Uint
    max_fee_per_gas: Uint
    gas: Uint
    to: Address
    value: U256
    data: Bytes
    access_list: Tuple[Access, ...]
    max_fee_per_blob_gas: U256
    blob_versioned_hashes: Tuple[VersionedHash, ...]
    y_parity: U256
    r: U256
    s: U256


Transaction = Union[
    LegacyTransaction,
    AccessListTransaction,
    FeeMarketTransaction,
    BlobTransaction,
]


@slotted_freezable
@dataclass
class RecoveredTransaction:
    """
    A decoded transaction together with the address that signed it.

    `sender` is only ever produced by signature recovery.
    """

    transaction: Transaction
    sender: Address

    @property
    def tx_type(self) -> TransactionType:
        """
        Type of the wrapped transaction.
        """
        return tx_type(self.transaction)

    @property
    def chain_id(self) -> Optional[U64]:
        """
        Chain the transaction is bound to, or `None` for a legacy transaction
        signed without replay protection.
        """
        if isinstance(self.transaction, LegacyTransaction):
            return legacy_chain_id(self.transaction.v)
        return self.transaction.chain_id

    @property
    def to(self) -> Union[Bytes0, Address]:
        """
        Recipient, or `Bytes0()` for a contract creation.
        """
        return self.transaction.to

    @property
    def value(self) -> U256:
        """
        Wei transferred to the recipient.
        """
        return self.transaction.value

    @property
    def data(self) -> Bytes:
        """
        Call data, or init code for a contract creation.
        """
        return self.transaction.data

    @property
    def gas(self) -> Uint:
        """
        Gas limit of the transaction.
        """
        return self.transaction.gas


def tx_type(tx: Transaction) -> TransactionType:
    """
    Return the type of `tx`.

    Parameters
    ----------
    tx :
        Transaction of interest.

    Returns
    -------
    tx_type : `TransactionType`
        The EIP-2718 type of the transaction.
    """
    if isinstance(tx, LegacyTransaction):
        return TransactionType.LEGACY
    elif isinstance(tx, AccessListTransaction):
        return TransactionType.ACCESS_LIST
    elif isinstance(tx, FeeMarketTransaction):
        return TransactionType.FEE_MARKET
    elif isinstance(tx, BlobTransaction):
        return TransactionType.BLOB
    else:
        raise TransactionTypeError(type(tx).__name__)


#
# Decoding
#


def decode_transaction(raw: Bytes) -> RecoveredTransaction:
    """
    Decode a signed transaction and recover its sender.

    Parameters
    ----------
    raw :
        The transaction as found on the wire: either a legacy RLP list, or a
        type byte followed by an RLP list.

    Returns
    -------
    transaction : `RecoveredTransaction`
        The transaction fields together with the recovered sender.
    """
    tx = parse_transaction(raw)
    sender = recover_sender(tx)
    logger.debug("recovered sender 0x%s", sender.hex())
    return RecoveredTransaction(transaction=tx, sender=sender)


def parse_transaction(raw: Bytes) -> Transaction:
    """
    Map the wire encoding of a transaction onto its typed record, without
    checking the signature.

    Parameters
    ----------
    raw :
        The transaction as found on the wire.

    Returns
    -------
    transaction : `Transaction`
        The decoded transaction.
    """
    if len(raw) == 0:
        raise RLPDecodingError("cannot decode an empty transaction")

    first_byte = raw[0]
    if first_byte >= LIST_OFFSET:
        logger.debug("decoding legacy transaction of %d bytes", len(raw))
        return _decode_legacy(rlp.read_item(raw))

    if first_byte == TransactionType.ACCESS_LIST.value:
        decode_body = _decode_access_list_transaction
    elif first_byte == TransactionType.FEE_MARKET.value:
        decode_body = _decode_fee_market_transaction
    else:
        raise TransactionTypeError(first_byte)

    logger.debug(
        "decoding type %d transaction of %d bytes", first_byte, len(raw)
    )
    return decode_body(rlp.read_item(memoryview(raw)[1:]))


def _read_fields(item: RLPItem, expected: int) -> List[RLPItem]:
    if not item.is_list:
        raise RLPDecodingError("transaction payload is not an RLP list")
    fields = item.to_list()
    if len(fields) != expected:
        raise UnexpectedListLengthError(len(fields), expected)
    return fields


def _decode_to(item: RLPItem) -> Union[Bytes0, Address]:
    # An empty payload marks a contract creation.
    if not item.is_list and item.payload_length == 0:
        return Bytes0()
    return item.to_address()


def _decode_fixed(item: RLPItem, cls: Type[B]) -> B:
    try:
        return cls(item.to_bytes())
    except ValueError as e:
        raise RLPDecodingError(f"malformed `{cls.__name__}`") from e


def _decode_access_list(item: RLPItem) -> Tuple[Access, ...]:
    access_list = []
    for entry in item.to_list():
        parts = entry.to_list()
        if len(parts) != 2:
            raise RLPDecodingError(
                f"access list entry needs 2 field(s), but got {len(parts)}"
            )
        account, slots = parts
        access_list.append(
            Access(
                account=_decode_fixed(account, Address),
                slots=tuple(
                    _decode_fixed(slot, StorageKey) for slot in slots.to_list()
                ),
            )
        )
    return tuple(access_list)


def _decode_legacy(item: RLPItem) -> LegacyTransaction:
    nonce, gas_price, gas, to, value, data, v, r, s = _read_fields(
        item, LEGACY_FIELD_COUNT
    )
    return LegacyTransaction(
        nonce=nonce.to_uint(U256),
        gas_price=gas_price.to_uint(),
        gas=gas.to_uint(),
        to=_decode_to(to),
        value=value.to_uint(U256),
        data=data.to_bytes(),
        v=v.to_uint(U256),
        r=r.to_uint(U256),
        s=s.to_uint(U256),
    )


def _decode_access_list_transaction(item: RLPItem) -> AccessListTransaction:
    (
        chain_id,
        nonce,
        gas_price,
        gas,
        to,
        value,
        data,
        access_list,
        y_parity,
        r,
        s,
    ) = _read_fields(item, ACCESS_LIST_FIELD_COUNT)
    return AccessListTransaction(
        chain_id=chain_id.to_uint(U64),
        nonce=nonce.to_uint(U256),
        gas_price=gas_price.to_uint(),
        gas=gas.to_uint(),
        to=_decode_to(to),
        value=value.to_uint(U256),
        data=data.to_bytes(),
        access_list=_decode_access_list(access_list),
        y_parity=y_parity.to_uint(U256),
        r=r.to_uint(U256),
        s=s.to_uint(U256),
    )


def _decode_fee_market_transaction(item: RLPItem) -> FeeMarketTransaction:
    (
        chain_id,
        nonce,
        max_priority_fee_per_gas,
        max_fee_per_gas,
        gas,
        to,
        value,
        data,
        access_list,
        y_parity,
        r,
        s,
    ) = _read_fields(item, FEE_MARKET_FIELD_COUNT)
    return FeeMarketTransaction(
        chain_id=chain_id.to_uint(U64),
        nonce=nonce.to_uint(U256),
        max_priority_fee_per_gas=max_priority_fee_per_gas.to_uint(),
        max_fee_per_gas=max_fee_per_gas.to_uint(),
        gas=gas.to_uint(),
        to=_decode_to(to),
        value=value.to_uint(U256),
        data=data.to_bytes(),
        access_list=_decode_access_list(access_list),
        y_parity=y_parity.to_uint(U256),
        r=r.to_uint(U256),
        s=s.to_uint(U256),
    )


#
# Encoding
#


def encode_transaction(tx: Transaction) -> Bytes:
    """
    Encode a transaction for the wire. Legacy transactions are a bare RLP
    list, typed transactions are their type byte followed by an RLP list.
    The field order of each record is its wire order.
    """
    if isinstance(tx, LegacyTransaction):
        return rlp.encode(tx)
    elif isinstance(tx, AccessListTransaction):
        return b"\x01" + rlp.encode(tx)
    elif isinstance(tx, FeeMarketTransaction):
        return b"\x02" + rlp.encode(tx)
    elif isinstance(tx, BlobTransaction):
        raise TransactionTypeError(TransactionType.BLOB.value)
    else:
        raise TransactionTypeError(type(tx).__name__)


def transaction_hash(tx: Transaction) -> Hash32:
    """
    Compute the hash identifying `tx`: the keccak256 of its signed wire
    encoding.
    """
    return keccak256(encode_transaction(tx))


#
# Signatures
#


def legacy_chain_id(v: U256) -> Optional[U64]:
    """
    Extract the chain id folded into the `v` of a legacy transaction.

    Parameters
    ----------
    v :
        The `v` value of the signature.

    Returns
    -------
    chain_id : `Optional[U64]`
        The chain id encoded according to EIP-155, or `None` if the
        transaction was signed without one.
    """
    if v == 27 or v == 28 or v == 0 or v == 1:
        return None
    if v < U256(35):
        raise InvalidSignatureError(f"bad v `{v}`")

    if v % U256(2) == 1:
        chain_id = (v - U256(35)) // U256(2)
    else:
        chain_id = (v - U256(36)) // U256(2)

    try:
        return U64(chain_id)
    except OverflowError as e:
        raise InvalidSignatureError(f"bad v `{v}`") from e


def recovery_parity(tx: Transaction) -> U256:
    """
    Normalize the `v` or `y_parity` of a signature to a recovery parity of
    `0` or `1`.
    """
    if isinstance(tx, LegacyTransaction):
        v = tx.v
        if v == 0 or v == 1:
            return v
        if v == 27 or v == 28:
            return v - U256(27)
        chain_id = legacy_chain_id(v)
        assert chain_id is not None
        return v - U256(35) - U256(chain_id) * U256(2)

    if isinstance(tx, BlobTransaction):
        raise TransactionTypeError(TransactionType.BLOB.value)
    if not isinstance(tx, (AccessListTransaction, FeeMarketTransaction)):
        raise TransactionTypeError(type(tx).__name__)
    if tx.y_parity != 0 and tx.y_parity != 1:
        raise InvalidSignatureError(f"bad y_parity `{tx.y_parity}`")
    return tx.y_parity


def recover_sender(tx: Transaction) -> Address:
    """
    Extracts the sender address from a transaction.

    The v, r, and s values are the three parts that make up the signature
    of a transaction. In order to recover the sender of a transaction the two
    components needed are the signature (``v``, ``r``, and ``s``) and the
    signing hash of the transaction. The sender's public key can be obtained
    with these two values and therefore the sender address can be retrieved.

    Parameters
    ----------
    tx :
        Transaction of interest.

    Returns
    -------
    sender : `txcodec.eth_types.Address`
        The address of the account that signed the transaction.
    """
    if isinstance(tx, BlobTransaction):
        raise TransactionTypeError(TransactionType.BLOB.value)
    if not isinstance(
        tx, (LegacyTransaction, AccessListTransaction, FeeMarketTransaction)
    ):
        raise TransactionTypeError(type(tx).__name__)

    r, s = tx.r, tx.s
    if U256(0) >= s or s > SECP256K1N_HALF:
        raise InvalidSignatureSError(int(s))
    if U256(0) >= r or r >= SECP256K1N:
        raise SignatureRecoveryError("bad r")

    public_key = secp256k1_recover(
        r, s, recovery_parity(tx), signing_hash(tx)
    )
    sender = Address(keccak256(public_key)[12:32])
    if sender == Address(bytes(Address.LENGTH)):
        raise SignatureRecoveryError("recovered the zero address")

    return sender


def signing_hash(tx: Transaction) -> Hash32:
    """
    Compute the hash that the signature of `tx` covers.

    Parameters
    ----------
    tx :
        Transaction of interest.

    Returns
    -------
    hash : `txcodec.crypto.hash.Hash32`
        Hash of the unsigned transaction.
    """
    if isinstance(tx, LegacyTransaction):
        chain_id = legacy_chain_id(tx.v)
        if chain_id is None:
            return signing_hash_pre155(tx)
        return signing_hash_155(tx, chain_id)
    elif isinstance(tx, AccessListTransaction):
        return signing_hash_2930(tx)
    elif isinstance(tx, FeeMarketTransaction):
        return signing_hash_1559(tx)
    elif isinstance(tx, BlobTransaction):
        raise TransactionTypeError(TransactionType.BLOB.value)
    else:
        raise TransactionTypeError(type(tx).__name__)


def signing_hash_pre155(tx: LegacyTransaction) -> Hash32:
    """
    Compute the hash of a transaction used in a legacy (pre EIP 155) signature.

    Parameters
    ----------
    tx :
        Transaction of interest.

    Returns
    -------
    hash : `txcodec.crypto.hash.Hash32`
        Hash of the transaction.
    """
    return keccak256(
        rlp.encode(
            (
                tx.nonce,
                tx.gas_price,
                tx.gas,
                tx.to,
                tx.value,
                tx.data,
            )
        )
    )


def signing_hash_155(tx: LegacyTransaction, chain_id: U64) -> Hash32:
    """
    Compute the hash of a transaction used in a EIP 155 signature.

    Parameters
    ----------
    tx :
        Transaction of interest.
    chain_id :
        The id of the current chain.

    Returns
    -------
    hash : `txcodec.crypto.hash.Hash32`
        Hash of the transaction.
    """
    return keccak256(
        rlp.encode(
            (
                tx.nonce,
                tx.gas_price,
                tx.gas,
                tx.to,
                tx.value,
                tx.data,
                chain_id,
                Uint(0),
                Uint(0),
            )
        )
    )


def signing_hash_2930(tx: AccessListTransaction) -> Hash32:
    """
    Compute the hash of a transaction used in a EIP 2930 signature.

    Parameters
    ----------
    tx :
        Transaction of interest.

    Returns
    -------
    hash : `txcodec.crypto.hash.Hash32`
        Hash of the transaction.
    """
    return keccak256(
        b"\x01"
        + rlp.encode(
            (
                tx.chain_id,
                tx.nonce,
                tx.gas_price,
                tx.gas,
                tx.to,
                tx.value,
                tx.data,
                tx.access_list,
            )
        )
    )


def signing_hash_1559(tx: FeeMarketTransaction) -> Hash32:
    """
    Compute the hash of a transaction used in a EIP 1559 signature.

    Parameters
    ----------
    tx :
        Transaction of interest.

    Returns
    -------
    hash : `txcodec.crypto.hash.Hash32`
        Hash of the transaction.
    """
    return keccak256(
        b"\x02"
        + rlp.encode(
            (
                tx.chain_id,
                tx.nonce,
                tx.max_priority_fee_per_gas,
                tx.max_fee_per_gas,
                tx.gas,
                tx.to,
                tx.value,
                tx.data,
                tx.access_list,
            )
        )
    )


def sign_transaction(
    tx: Transaction, secret_key: int, chain_id: Optional[U64] = None
) -> Transaction:
    """
    Return a copy of `tx` carrying a fresh signature made with `secret_key`.

    Legacy transactions are signed with EIP-155 replay protection when
    `chain_id` is given, and in the Frontier manner otherwise. Typed
    transactions sign over their own `chain_id` field and ignore the
    argument.
    """
    if isinstance(tx, LegacyTransaction):
        if chain_id is None:
            r, s, parity = secp256k1_sign(signing_hash_pre155(tx), secret_key)
            v = U256(27) + parity
        else:
            r, s, parity = secp256k1_sign(
                signing_hash_155(tx, chain_id), secret_key
            )
            v = U256(35) + U256(chain_id) * U256(2) + parity
        return replace(tx, v=v, r=r, s=s)
    elif isinstance(tx, (AccessListTransaction, FeeMarketTransaction)):
        r, s, parity = secp256k1_sign(signing_hash(tx), secret_key)
        return replace(tx, y_parity=parity, r=r, s=s)
    elif isinstance(tx, BlobTransaction):
        raise TransactionTypeError(TransactionType.BLOB.value)
    else:
        raise TransactionTypeError(type(tx).__name__)
