"""
Ethereum Transaction Codec
^^^^^^^^^^^^^^^^^^^^^^^^^^

Decodes raw, RLP encoded Ethereum transactions into typed records and back,
computes the hash covered by each signature, recovers the sender, and
computes the transaction hash.

Legacy (Frontier and EIP-155), EIP-2930 access list and EIP-1559 fee market
transactions are supported. Every operation is a pure function over
immutable values.
"""

from .transactions import (  # noqa: F401
    AccessListTransaction,
    BlobTransaction,
    FeeMarketTransaction,
    LegacyTransaction,
    RecoveredTransaction,
    Transaction,
    TransactionType,
    decode_transaction,
    encode_transaction,
    legacy_chain_id,
    parse_transaction,
    recover_sender,
    sign_transaction,
    signing_hash,
    transaction_hash,
    tx_type,
)

__version__ = "0.1.0"
