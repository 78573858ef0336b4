from ethereum_types.bytes import Bytes, Bytes0
from ethereum_types.numeric import U64, U256, Uint

from txcodec.crypto.hash import keccak256
from txcodec.eth_types import Access
from txcodec.transactions import (
    AccessListTransaction,
    FeeMarketTransaction,
    LegacyTransaction,
)
from txcodec.utils.hexadecimal import hex_to_address

# Well known key used throughout the ethereum/tests fixtures.
TEST_SECRET_KEY = int(
    "0x45a915e4d060149eb4365960e6a7a45f334393093061116b197e3240065ff2d8", 16
)
TEST_SENDER = hex_to_address("0xa94f5374fce5edbc8e2a8697c15331677e6ebf0b")

OTHER_SECRET_KEY = int("46" * 32, 16)
OTHER_SENDER = hex_to_address("0x9d8a62f656a8d1615c1294fd71e9cfb3e4855a4f")

SEPOLIA = U64(0xAA36A7)

hash1 = keccak256(b"foo")
hash2 = keccak256(b"bar")

address1 = hex_to_address("0x00000000219ab540356cbb839cbe05303d7705fa")
address2 = hex_to_address("0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2")

access_list = (
    Access(account=address1, slots=(hash1, hash2)),
    Access(account=address2, slots=()),
)

unsigned_legacy = LegacyTransaction(
    nonce=U256(0),
    gas_price=Uint(1_000_000_000),
    gas=Uint(21000),
    to=address2,
    value=U256(10**18),
    data=Bytes(b""),
    v=U256(0),
    r=U256(0),
    s=U256(0),
)

unsigned_access_list = AccessListTransaction(
    chain_id=SEPOLIA,
    nonce=U256(1),
    gas_price=Uint(7),
    gas=Uint(100000),
    to=address1,
    value=U256(0),
    data=Bytes(b"bar"),
    access_list=access_list,
    y_parity=U256(0),
    r=U256(0),
    s=U256(0),
)

unsigned_fee_market = FeeMarketTransaction(
    chain_id=U64(1),
    nonce=U256(5),
    max_priority_fee_per_gas=Uint(2_000_000_000),
    max_fee_per_gas=Uint(30_000_000_000),
    gas=Uint(60000),
    to=Bytes0(),
    value=U256(0),
    data=Bytes(bytes.fromhex("6080604052")),
    access_list=(),
    y_parity=U256(0),
    r=U256(0),
    s=U256(0),
)
