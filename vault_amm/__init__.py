"""
Client-side trading math for constant-product token vaults.

Pure, synchronous, integer-only. Callers gather reserves and fee
configuration, pass an explicit `now_ms`, and treat every result as an
estimate of the authoritative on-chain computation.
"""

__version__ = "0.1.0"
