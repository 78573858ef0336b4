"""
.. _rlp_reader:

RLP Reader
^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Reads Recursive Length Prefix (RLP) encoded data without copying it. Every
item is an `RLPItem`: a view over the original buffer that knows where its
header ends and how long its payload is. Nested lists are split into child
views by walking the headers, so only the values that are finally converted
(integers, byte strings, addresses) are ever materialized.

Non-canonical encodings (for example a length prefix with leading zero bytes)
are accepted as long as every declared length fits inside the buffer.
"""

import enum
from typing import (
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeAlias,
    TypeVar,
    Union,
)

from ethereum_types.bytes import Bytes
from ethereum_types.numeric import Uint, Unsigned

from txcodec.eth_types import Address
from txcodec.exceptions import RLPDecodingError

STRING_OFFSET = 0x80
LONG_STRING_OFFSET = 0xB7
LIST_OFFSET = 0xC0
LONG_LIST_OFFSET = 0xF7
SHORT_LENGTH_LIMIT = 0x38
"""
Payloads shorter than this many bytes carry their length in the first byte.
"""

MAX_DEPTH = 256
"""
Deepest list nesting that `RLPItem.to_simple` materializes.
"""

Buffer: TypeAlias = Union[bytes, bytearray, memoryview]
Simple: TypeAlias = Union[Sequence["Simple"], bytes]

W = TypeVar("W", bound=Unsigned)


class ItemKind(enum.Enum):
    """
    Shape of an RLP item, as announced by its first byte.
    """

    BYTE = "byte"
    """
    A single byte below `0x80`, which is its own encoding.
    """

    STRING = "string"
    LIST = "list"


class RLPItem:
    """
    A single RLP item located at `offset` inside `buffer`.

    The item must fit inside the window `[offset, offset + length)`; when
    `length` is omitted the window extends to the end of the buffer. The
    item itself may be shorter than the window (see `item_length`).
    """

    __slots__ = (
        "buffer",
        "offset",
        "kind",
        "payload_offset",
        "payload_length",
    )

    buffer: memoryview
    offset: int
    kind: ItemKind
    payload_offset: int
    payload_length: int

    def __init__(
        self, buffer: Buffer, offset: int = 0, length: Optional[int] = None
    ) -> None:
        view = buffer if isinstance(buffer, memoryview) else memoryview(buffer)
        if length is None:
            length = len(view) - offset
        end = offset + length
        if offset < 0 or length < 0 or end > len(view):
            raise RLPDecodingError("item window lies outside of the buffer")
        if length == 0:
            raise RLPDecodingError("cannot decode an empty item")

        self.buffer = view
        self.offset = offset
        (
            self.kind,
            self.payload_offset,
            self.payload_length,
        ) = _decode_header(view, offset, end)

    def __repr__(self) -> str:
        return (
            f"RLPItem(kind={self.kind.value}, offset={self.offset}, "
            f"payload_length={self.payload_length})"
        )

    @property
    def is_list(self) -> bool:
        """
        `True` if this item is a list of other items.
        """
        return self.kind is ItemKind.LIST

    @property
    def item_length(self) -> int:
        """
        Length of the whole encoding of this item, header included.
        """
        return self.payload_offset - self.offset + self.payload_length

    def payload(self) -> memoryview:
        """
        The payload of this item, as a view into the original buffer.
        """
        return self.buffer[
            self.payload_offset : self.payload_offset + self.payload_length
        ]

    def to_bytes(self) -> Bytes:
        """
        Copy out the payload of a byte string item.
        """
        self._expect_string()
        return bytes(self.payload())

    def to_uint(self, cls: Type[W] = Uint) -> W:  # type: ignore[assignment]
        """
        Interpret the payload as a big endian unsigned integer of type `cls`.
        An empty payload is zero.
        """
        self._expect_string()
        try:
            return cls.from_be_bytes(self.payload())
        except (ValueError, OverflowError) as e:
            raise RLPDecodingError(
                f"value does not fit in `{cls.__name__}`"
            ) from e

    def to_address(self) -> Address:
        """
        Interpret the payload as an address, left padding payloads shorter
        than 20 bytes.
        """
        self._expect_string()
        if self.payload_length > Address.LENGTH:
            raise RLPDecodingError(
                f"address payload is {self.payload_length} bytes long"
            )
        padding = bytes(Address.LENGTH - self.payload_length)
        return Address(padding + bytes(self.payload()))

    def to_list(self) -> List["RLPItem"]:
        """
        Split a list item into views of its children, in order.
        """
        if not self.is_list:
            raise RLPDecodingError(f"expected a list, got a {self.kind.value}")

        children = []
        cursor = self.payload_offset
        end = self.payload_offset + self.payload_length
        while cursor < end:
            child = RLPItem(self.buffer, cursor, end - cursor)
            children.append(child)
            cursor += child.item_length

        return children

    def __iter__(self) -> Iterator["RLPItem"]:
        return iter(self.to_list())

    def to_simple(self) -> Simple:
        """
        Materialize this item and all of its children as nested `bytes` and
        lists. Lists nested deeper than `MAX_DEPTH` are rejected.
        """
        return self._to_simple(0)

    def _to_simple(self, depth: int) -> Simple:
        if not self.is_list:
            return self.to_bytes()
        if depth >= MAX_DEPTH:
            raise RLPDecodingError(
                f"lists nested deeper than {MAX_DEPTH} levels"
            )
        return [child._to_simple(depth + 1) for child in self.to_list()]

    def _expect_string(self) -> None:
        if self.is_list:
            raise RLPDecodingError("expected a byte string, got a list")


def _decode_header(
    view: memoryview, offset: int, end: int
) -> Tuple[ItemKind, int, int]:
    first_rlp_byte = view[offset]

    # This occurs only when the raw data is a single byte whose value < 128
    if first_rlp_byte < STRING_OFFSET:
        return ItemKind.BYTE, offset, 1
    elif first_rlp_byte <= LONG_STRING_OFFSET:
        kind = ItemKind.STRING
        prefix_length = 1
        payload_length = first_rlp_byte - STRING_OFFSET
    elif first_rlp_byte < LIST_OFFSET:
        kind = ItemKind.STRING
        prefix_length, payload_length = _decode_long_length(
            view, offset, end, first_rlp_byte - LONG_STRING_OFFSET
        )
    elif first_rlp_byte <= LONG_LIST_OFFSET:
        kind = ItemKind.LIST
        prefix_length = 1
        payload_length = first_rlp_byte - LIST_OFFSET
    else:
        kind = ItemKind.LIST
        prefix_length, payload_length = _decode_long_length(
            view, offset, end, first_rlp_byte - LONG_LIST_OFFSET
        )

    payload_offset = offset + prefix_length
    if payload_offset + payload_length > end:
        raise RLPDecodingError(
            f"{kind.value} of {payload_length} byte(s) at offset {offset} "
            "runs past the end of the buffer"
        )

    return kind, payload_offset, payload_length


def _decode_long_length(
    view: memoryview, offset: int, end: int, length_length: int
) -> Tuple[int, int]:
    # The big endian length of the payload follows the first byte.
    if offset + 1 + length_length > end:
        raise RLPDecodingError(
            f"length prefix at offset {offset} runs past the end of the buffer"
        )
    payload_length = int(
        Uint.from_be_bytes(view[offset + 1 : offset + 1 + length_length])
    )
    return 1 + length_length, payload_length


def read_item(encoded_data: Buffer) -> RLPItem:
    """
    Read the single top level item that makes up `encoded_data`.

    Parameters
    ----------
    encoded_data :
        A sequence of bytes, in RLP form.

    Returns
    -------
    item : `RLPItem`
        View of the item. Raises `RLPDecodingError` if bytes remain after it.
    """
    item = RLPItem(encoded_data)
    if item.item_length != len(item.buffer):
        raise RLPDecodingError(
            f"{len(item.buffer) - item.item_length} trailing byte(s) "
            "after the RLP item"
        )
    return item


def decode(encoded_data: Buffer) -> Simple:
    """
    Decodes a byte string or a (nested) list of byte strings from
    `encoded_data`.
    """
    return read_item(encoded_data).to_simple()
