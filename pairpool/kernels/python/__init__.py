"""
Production Python kernels.

These modules are designed to be:
- deterministic (integer-only, no floating point anywhere),
- easy to audit (explicit intermediate variables),
- small surface-area (pure functions, frozen result records),
- checked against the u64 domain at every step.
"""
