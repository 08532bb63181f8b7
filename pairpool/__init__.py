"""
pairpool: a two-asset constant-product liquidity-pool engine.
"""

__version__ = "0.1.0"
