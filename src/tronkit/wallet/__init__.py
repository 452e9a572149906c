"""
All classes and methods which have to do with a TRON wallet
"""
# wallet/__init__.py
from tronkit.wallet.address import *
from tronkit.wallet.batch import *
from tronkit.wallet.derivation import *
from tronkit.wallet.mnemonic import *
from tronkit.wallet.wallet import *
from tronkit.wallet.xkeys import *
