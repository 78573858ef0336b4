"""
.. _rlp_encoder:

RLP Encoder
^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Serializes integers, byte strings, addresses and (nested) sequences of them
into Recursive Length Prefix (RLP) encoded bytes.
"""

from dataclasses import fields, is_dataclass
from typing import Any, Sequence, Union

from ethereum_types.bytes import Bytes
from ethereum_types.numeric import FixedUnsigned, Uint

from txcodec.crypto.hash import Hash32, keccak256
from txcodec.eth_types import Address
from txcodec.exceptions import RLPEncodingError

from .reader import (
    LIST_OFFSET,
    LONG_LIST_OFFSET,
    LONG_STRING_OFFSET,
    SHORT_LENGTH_LIMIT,
    STRING_OFFSET,
)


def encode(raw_data: Any) -> Bytes:
    """
    Encodes `raw_data` into a sequence of bytes using RLP.

    Parameters
    ----------
    raw_data :
        A `Bytes`, `Uint`, `U256`, dataclass, or sequence of RLP encodable
        objects.

    Returns
    -------
    encoded : `ethereum_types.bytes.Bytes`
        The RLP encoded bytes representing `raw_data`.
    """
    if isinstance(raw_data, Sequence):
        if isinstance(raw_data, (bytearray, bytes)):
            return encode_bytes(raw_data)
        elif isinstance(raw_data, str):
            return encode_bytes(raw_data.encode())
        else:
            return encode_sequence(raw_data)
    elif isinstance(raw_data, bool):
        if raw_data:
            return encode_bytes(b"\x01")
        else:
            return encode_bytes(b"")
    elif isinstance(raw_data, (Uint, FixedUnsigned, int)):
        return encode_uint(raw_data)
    elif is_dataclass(raw_data) and not isinstance(raw_data, type):
        return encode_sequence(
            [getattr(raw_data, field.name) for field in fields(raw_data)]
        )
    else:
        raise RLPEncodingError(
            "RLP Encoding of type {} is not supported".format(type(raw_data))
        )


def encode_uint(value: Union[Uint, FixedUnsigned, int]) -> Bytes:
    """
    Encodes an unsigned integer as its minimal big endian representation.
    Zero is the empty string.
    """
    number = int(value)
    if number < 0:
        raise RLPEncodingError(f"cannot encode negative integer {number}")
    return encode_bytes(Uint(number).to_be_bytes())


def encode_address(address: Address) -> Bytes:
    """
    Encodes a 20 byte address.
    """
    if len(address) != Address.LENGTH:
        raise RLPEncodingError(
            f"expected a 20 byte address, got {len(address)} bytes"
        )
    return encode_bytes(address)


def encode_bytes(raw_bytes: Bytes) -> Bytes:
    """
    Encodes `raw_bytes`, a sequence of bytes, using RLP.

    Parameters
    ----------
    raw_bytes :
        Bytes to encode with RLP.

    Returns
    -------
    encoded : `ethereum_types.bytes.Bytes`
        The RLP encoded bytes representing `raw_bytes`.
    """
    len_raw_data = len(raw_bytes)

    if len_raw_data == 1 and raw_bytes[0] < STRING_OFFSET:
        return bytes(raw_bytes)
    elif len_raw_data < SHORT_LENGTH_LIMIT:
        return bytes([STRING_OFFSET + len_raw_data]) + raw_bytes
    else:
        # length of raw data represented as big endian bytes
        len_raw_data_as_be = Uint(len_raw_data).to_be_bytes()
        return (
            bytes([LONG_STRING_OFFSET + len(len_raw_data_as_be)])
            + len_raw_data_as_be
            + raw_bytes
        )


def encode_sequence(raw_sequence: Sequence[Any]) -> Bytes:
    """
    Encodes a list of RLP encodable objects (`raw_sequence`) using RLP.

    Parameters
    ----------
    raw_sequence :
            Sequence of RLP encodable objects.

    Returns
    -------
    encoded : `ethereum_types.bytes.Bytes`
        The RLP encoded bytes representing `raw_sequence`.
    """
    return wrap_list(join_encodings(raw_sequence))


def wrap_list(joined_encodings: Bytes) -> Bytes:
    """
    Prefix already encoded, concatenated items with a list header.
    """
    len_joined_encodings = len(joined_encodings)

    if len_joined_encodings < SHORT_LENGTH_LIMIT:
        return bytes([LIST_OFFSET + len_joined_encodings]) + joined_encodings
    else:
        len_joined_encodings_as_be = Uint(len_joined_encodings).to_be_bytes()
        return (
            bytes([LONG_LIST_OFFSET + len(len_joined_encodings_as_be)])
            + len_joined_encodings_as_be
            + joined_encodings
        )


def join_encodings(raw_sequence: Sequence[Any]) -> Bytes:
    """
    Obtain concatenation of rlp encoding for each item in the sequence
    raw_sequence.
    """
    return b"".join(encode(item) for item in raw_sequence)


def rlp_hash(data: Any) -> Hash32:
    """
    Obtain the keccak-256 hash of the rlp encoding of the passed in data.
    """
    return keccak256(encode(data))
