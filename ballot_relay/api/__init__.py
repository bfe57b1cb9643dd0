"""API router registry used by the app factory."""

from __future__ import annotations

from fastapi import APIRouter

from . import health, relay

API_ROUTERS: tuple[APIRouter, ...] = (
    health.router,
    relay.router,
)

__all__ = ["API_ROUTERS"]
