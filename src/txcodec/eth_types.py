"""
Ethereum Types
^^^^^^^^^^^^^^

.. contents:: Table of Contents
    :backlinks: none
    :local:

Introduction
------------

Types reused throughout the codec, which are specific to Ethereum.
"""

from dataclasses import dataclass
from typing import Tuple

from ethereum_types.bytes import Bytes20, Bytes32
from ethereum_types.frozen import slotted_freezable

from .crypto.hash import Hash32

Address = Bytes20
StorageKey = Bytes32

__all__ = ("Access", "Address", "Hash32", "StorageKey")


@slotted_freezable
@dataclass
class Access:
    """
    A mapping from account address to storage slots that are pre-warmed as
    part of a transaction.
    """

    account: Address
    """
    Address of the account that is accessed.
    """

    slots: Tuple[StorageKey, ...]
    """
    Storage keys of the account that are accessed, in wire order.
    """
