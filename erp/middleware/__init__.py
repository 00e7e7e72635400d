"""HTTP middleware. Applied in erp.main (last added = outermost)."""

from erp.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
