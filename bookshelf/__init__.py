"""
Bookshelf: users and books HTTP API backed by MongoDB.

Application package root. Layered the same way across the service:

Layers:
    - domain: Entities, ports (ABCs), errors. No framework imports.
    - application: Use cases, DTOs, input presence checks.
    - infrastructure: MongoDB gateway, document mapper, repository adapters.
    - interfaces: FastAPI routers, Pydantic schemas, dependency wiring.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
