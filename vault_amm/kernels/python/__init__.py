"""
Production Python kernels.

These modules are designed to be:
- deterministic (integer-only, floor rounding),
- easy to audit (explicit intermediate variables),
- small surface-area (pure functions, typed results),
- checkable against the on-chain contract through recorded quote vectors.
"""
