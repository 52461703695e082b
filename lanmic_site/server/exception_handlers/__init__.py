"""
Exception handlers for the LANMIC site server.

Every error leaving the API is rendered in the same JSON envelope; the
setup function registers the handlers with the FastAPI application.
"""

from .global_handler import error_envelope, setup_exception_handlers

__all__ = ["error_envelope", "setup_exception_handlers"]
