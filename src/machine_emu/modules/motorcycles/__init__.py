"""Motorcycles module for simulated motorcycle management."""

from fastapi import APIRouter


router = APIRouter(prefix="/motorcycles", tags=["motorcycles"])

# Import routes to register them (must be after router is defined)
from machine_emu.modules.motorcycles import routes  # noqa: F401, E402
