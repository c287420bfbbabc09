"""
RedCoins: credits-for-coins ledger service.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters).

Bounded contexts:
    - ledger: Account registry, trade recording, balance checks, reports.

Layers:
    - domain: Entities, fixed-point quantities, ports (ABCs), errors.
    - application: Use cases, DTOs, orchestration.
    - infrastructure: Adapters (SQL store, password hashing, price quotes).
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
