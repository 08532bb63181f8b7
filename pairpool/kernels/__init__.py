"""
Kernel layer.

`pairpool/kernels/python/` contains the integer-only pricing and share-accounting
kernels. The core operations in `pairpool/core/` wrap them with pool-state
handling, slippage checks and typed results.
"""
