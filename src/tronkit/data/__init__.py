"""
All methods for encoding and representing data in tronkit
"""

# data/__init__.py
from tronkit.data.base58 import *
from tronkit.data.decimal_amount import *
from tronkit.data.wordlist import *
