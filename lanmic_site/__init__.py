"""LANMIC Site.

Backend for the LANMIC corporate marketing website and its admin dashboard.

- ``lanmic_site.core``: logging, monitoring, SQLModel entities, repositories
  and API I/O models.
- ``lanmic_site.server``: the FastAPI application, routers, middleware and
  services (authentication, email, uploads, event relay).

Run the server with ``uvicorn lanmic_site.server.main:app``.
"""

__version__ = "1.0.0"
