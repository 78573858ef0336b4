"""
Utility functions used by the codec and its loaders.
"""
