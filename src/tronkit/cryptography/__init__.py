"""
Elliptic curve cryptography, key material and hash functions
"""
# cryptography/__init__.py


from tronkit.cryptography.ecc import *
from tronkit.cryptography.hash_functions import *
from tronkit.cryptography.keys import *
