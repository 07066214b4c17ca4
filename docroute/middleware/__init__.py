"""HTTP middleware. Applied in docroute.main."""

from docroute.middleware.request_id import RequestIDMiddleware

__all__ = [
    "RequestIDMiddleware",
]
