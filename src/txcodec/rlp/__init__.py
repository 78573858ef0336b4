"""
Recursive Length Prefix (RLP) Encoding
^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^

Defines the serialization and deserialization format used throughout
Ethereum. Reading is done through zero-copy `RLPItem` views, writing through
the `encode_*` functions.
"""

from .encoder import (  # noqa: F401
    encode,
    encode_address,
    encode_bytes,
    encode_sequence,
    encode_uint,
    join_encodings,
    rlp_hash,
    wrap_list,
)
from .reader import ItemKind, RLPItem, Simple, decode, read_item  # noqa: F401
