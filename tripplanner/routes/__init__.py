# routes/__init__.py
from fastapi import APIRouter
from tripplanner.routes.trip import trip_routes, participant_routes

api_router = APIRouter()

# Trip routes
api_router.include_router(trip_routes.router)

# Participant routes
api_router.include_router(participant_routes.router)
