"""Application layer: interfaces, services, use cases.

Depends only on domain, schemas and protocol definitions (DIP).
Infrastructure implements the interfaces (backend transport, auth state,
selection storage).
"""
