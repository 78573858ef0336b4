"""
Error types raised while reading, writing, hashing, and recovering
transactions.
"""

from typing import Final, Union


class EthereumException(Exception):
    """
    Base class for all exceptions _expected_ to be thrown during normal
    operation.
    """


class RLPException(EthereumException):
    """
    Common base class for all RLP exceptions.
    """


class RLPDecodingError(RLPException):
    """
    Indicates that RLP decoding failed: a declared length runs past the end
    of the buffer, or the data does not have the expected shape.
    """

    def __str__(self) -> str:
        message = [super().__str__()]
        current: BaseException = self
        while isinstance(current, RLPDecodingError) and current.__cause__:
            current = current.__cause__
            if isinstance(current, RLPDecodingError):
                as_str = super(RLPDecodingError, current).__str__()
            else:
                as_str = str(current)
            message.append(f"\tbecause {as_str}")
        return "\n".join(message)


class RLPEncodingError(RLPException):
    """
    Indicates that RLP encoding failed.
    """


class InvalidTransaction(EthereumException):
    """
    Thrown when a transaction being processed is found to be invalid.
    """


class TransactionTypeError(InvalidTransaction):
    """
    Unknown or unsupported [EIP-2718] transaction type byte.

    [EIP-2718]: https://eips.ethereum.org/EIPS/eip-2718
    """

    transaction_type: Final[Union[int, str]]
    """
    The type byte of the transaction that caused the error, or the name of
    the class when the object is not a transaction at all.
    """

    def __init__(self, transaction_type: Union[int, str]):
        super().__init__(f"unsupported transaction type `{transaction_type}`")
        self.transaction_type = transaction_type


class UnexpectedListLengthError(InvalidTransaction):
    """
    The RLP list of a transaction does not have the number of fields
    required by its type.
    """

    actual: Final[int]
    """
    Number of fields found on the wire.
    """

    expected: Final[int]
    """
    Number of fields the transaction type requires.
    """

    def __init__(self, actual: int, expected: int):
        super().__init__(
            f"expected {expected} transaction field(s), but got {actual}"
        )
        self.actual = actual
        self.expected = expected


class InvalidSignatureError(InvalidTransaction):
    """
    Thrown when a transaction has an invalid signature.
    """


class InvalidSignatureSError(InvalidSignatureError):
    """
    The `s` component of the signature is zero or above half of the
    secp256k1 curve order, i.e. the signature is malleable.
    """

    s: Final[int]
    """
    The rejected `s` value.
    """

    def __init__(self, s: int):
        super().__init__(f"bad s `{hex(s)}`")
        self.s = s


class SignatureRecoveryError(InvalidSignatureError):
    """
    No public key could be recovered from the signature.
    """


class TransactionLoadError(InvalidTransaction):
    """
    A JSON transaction object is missing a field or holds a malformed value.
    """


class TransactionHashMismatchError(InvalidTransaction):
    """
    The hash advertised alongside a JSON transaction does not match the hash
    of its encoding.
    """

    expected: Final[bytes]
    actual: Final[bytes]

    def __init__(self, expected: bytes, actual: bytes):
        super().__init__(
            f"transaction hash mismatch: expected 0x{expected.hex()}, "
            f"computed 0x{actual.hex()}"
        )
        self.expected = expected
        self.actual = actual
