"""
LANMIC Site Server Package.

This package contains the web server implementation for the LANMIC corporate
site backend: the API definition, configuration, middleware and services.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration settings and constants.
    exception_handlers: Uniform error envelope handlers.
    middleware: Request timing and security headers.
    services: Business logic and service layer.
"""
