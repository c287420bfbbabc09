"""
Application layer for the ledger bounded context.

Use cases coordinate domain entities and ports to register accounts,
record trades and build reports. No framework or infrastructure
imports allowed.
"""
