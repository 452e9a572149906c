"""
The caller-facing operation layer: result envelope, parameter resolution, ledger collaborator and TronService
"""
# service/__init__.py
from tronkit.service.ledger import *
from tronkit.service.params import *
from tronkit.service.results import *
from tronkit.service.service import *
