"""
Debtor status lookup service.
The HTTP layer lives in `src.api`; process-wide settings and logging live in `src.common`.
"""
