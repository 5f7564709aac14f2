"""
Pydantic schema definitions for API payloads.

Each domain (lines, stations) defines its own request and response
models.  Schemas are separated from the SQL rows so the API
representation stays decoupled from persistence.
"""
