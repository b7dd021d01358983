"""HTTP middleware for the public surface.

Applied in main app; import and use from inventory_console.main.
"""

from inventory_console.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
