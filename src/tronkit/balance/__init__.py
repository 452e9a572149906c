"""
Balance lookups: assets, normalization, upstream providers and the failover aggregator
"""
# balance/__init__.py
from tronkit.balance.aggregator import *
from tronkit.balance.assets import *
from tronkit.balance.normalizer import *
from tronkit.balance.providers import *
