"""Cars module for simulated car management."""

from fastapi import APIRouter


router = APIRouter(prefix="/cars", tags=["cars"])

# Import routes to register them (must be after router is defined)
from machine_emu.modules.cars import routes  # noqa: F401, E402
