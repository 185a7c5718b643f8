"""
Infrastructure adapters for the library bounded context.

Each repository adapter implements a domain port on top of
the shared MongoGateway.
"""
