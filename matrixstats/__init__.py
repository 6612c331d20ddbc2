"""
Matrixstats - Matrix Statistics Service

An authenticated API that issues bearer tokens and computes aggregate
statistics over batches of matrices supplied by peer services.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- auth: Credential checks and token lifecycle
- stats: Matrix statistics aggregation
- api: Request models, validation pipeline, error mapping
- client: HTTP client for peer services calling the stats API
"""

__version__ = "1.0.0"
