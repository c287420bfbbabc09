"""
Infrastructure adapters for the ledger bounded context.

Each adapter implements a domain port (ABC) and connects
to external systems: the SQL store, the hash function, the ticker API.
"""
