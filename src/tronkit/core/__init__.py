"""
Contains the core elements that are used within tronkit

Core:
    -Provides the reference formats for TRON addresses, keys and balances
    -Provides custom exceptions for the various tronkit elements
    -Provides logging and the immutable service configuration
"""
# core/__init__.py
from tronkit.core.config import *
from tronkit.core.exceptions import *
from tronkit.core.formats import *
from tronkit.core.logging import *
