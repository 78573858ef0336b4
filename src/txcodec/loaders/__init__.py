"""
Loaders turning structured transaction data into transaction records.
"""
