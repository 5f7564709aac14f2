"""
Application package initializer.

The API is split into layers: ``api`` holds the HTTP routes,
``services`` the orchestration logic, ``repositories`` the SQL against
the relational store and ``schemas`` the request/response payloads.
Versioning is handled by grouping routers under ``api/<version>/``.
"""

from .main import app  # noqa: F401
