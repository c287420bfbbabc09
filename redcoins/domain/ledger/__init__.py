"""
Ledger bounded context: domain layer.

- Account registry entities
- Append-only ledger entries and fixed-point quantities
- Typed failures returned to the interface layer
"""
