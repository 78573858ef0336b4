"""
Cryptographic primitives used by the transaction codec.
"""
