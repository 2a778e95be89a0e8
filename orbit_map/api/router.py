from fastapi import APIRouter
from orbit_map.api.endpoints import orbits

api_router = APIRouter()

# Combine all sub-routers into one
api_router.include_router(orbits.router)
