"""ASGI middleware."""

from tenantguard.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
