import pytest
from ethereum_types.numeric import U256

from txcodec.crypto.elliptic_curve import (
    SECP256K1N,
    SECP256K1N_HALF,
    secp256k1_recover,
    secp256k1_sign,
)
from txcodec.crypto.hash import keccak256
from txcodec.exceptions import SignatureRecoveryError
from txcodec.utils.hexadecimal import hex_to_bytes

from .helpers import (
    OTHER_SECRET_KEY,
    OTHER_SENDER,
    TEST_SECRET_KEY,
    TEST_SENDER,
)


@pytest.mark.parametrize(
    "data, expected",
    [
        (
            b"",
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470",
        ),
        (
            b"\xc0",
            "1dcc4de8dec75d7aab85b567b6ccd41ad312451b948a7413f0a142fd40d49347",
        ),
    ],
)
def test_keccak256(data: bytes, expected: str) -> None:
    assert keccak256(data) == hex_to_bytes(expected)


@pytest.mark.parametrize(
    "secret_key, address",
    [(TEST_SECRET_KEY, TEST_SENDER), (OTHER_SECRET_KEY, OTHER_SENDER)],
)
def test_sign_then_recover(secret_key: int, address: bytes) -> None:
    message_hash = keccak256(b"foobar")
    r, s, parity = secp256k1_sign(message_hash, secret_key)

    assert U256(0) < s <= SECP256K1N_HALF
    assert parity in (0, 1)

    public_key = secp256k1_recover(r, s, parity, message_hash)
    assert len(public_key) == 64
    assert keccak256(public_key)[12:] == address


def test_recover_with_other_parity_gives_other_key() -> None:
    message_hash = keccak256(b"foobar")
    r, s, parity = secp256k1_sign(message_hash, TEST_SECRET_KEY)

    public_key = secp256k1_recover(r, s, U256(1) - parity, message_hash)
    assert keccak256(public_key)[12:] != TEST_SENDER


def test_recover_rejects_r_off_the_curve() -> None:
    # Roughly half of all x coordinates have no point on secp256k1.
    message_hash = keccak256(b"foobar")
    rejected = 0
    for x in range(1, 33):
        try:
            secp256k1_recover(U256(x), U256(1), U256(0), message_hash)
        except SignatureRecoveryError:
            rejected += 1
    assert rejected > 0


def test_curve_order_half() -> None:
    assert SECP256K1N_HALF == int(
        "7fffffffffffffffffffffffffffffff5d576e7357a4501ddfe92f46681b20a0", 16
    )
    assert SECP256K1N_HALF * U256(2) + U256(1) == SECP256K1N
