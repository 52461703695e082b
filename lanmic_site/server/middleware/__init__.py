"""
Middleware modules for the LANMIC site server.

Request timing/logging and security response headers.
"""

from .request_timing_middleware import RequestTimingMiddleware
from .security_headers import SecurityHeadersMiddleware

__all__ = ["RequestTimingMiddleware", "SecurityHeadersMiddleware"]
