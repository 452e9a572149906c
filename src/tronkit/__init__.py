"""
tronkit - TRON address derivation and balance normalization
"""
__version__ = "0.1.0"
