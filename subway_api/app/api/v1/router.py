"""
Top‑level router for version 1 of the API.

This router aggregates the resource routers.  When a new resource is
introduced, include its router here.
"""

from fastapi import APIRouter

from .endpoints import lines, stations

router = APIRouter()

router.include_router(stations.router, prefix="/stations", tags=["stations"])
router.include_router(lines.router, prefix="/lines", tags=["lines"])
