"""Infrastructure layer: cache keys, backend transport, and session-token security.

Implements the protocols declared in application.interfaces.
"""
