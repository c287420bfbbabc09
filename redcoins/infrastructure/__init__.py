"""
Infrastructure layer package.

Adapters implementing domain ports against external systems:
the relational store, the password hash function and the
market-data ticker.
"""
