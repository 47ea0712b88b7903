"""
Kernel layer.

`vault_amm/kernels/python/` contains the integer-only formulas that mirror the
on-chain vault trading contract. The `core` package wraps them with input
validation and the engine-level types.
"""
