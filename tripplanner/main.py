from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from tripplanner.core.config import settings
from tripplanner.core.errors import TripPlannerError
from tripplanner.core.init_db import init_db
from tripplanner.core.redis_lifecycle import init_redis_client, close_redis
from tripplanner.routes import api_router
from tripplanner.routes.errors import trip_planner_error_handler

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.PROJECT_DESCRIPTION,
    openapi_url="/openapi.json"
)

# Browser requests only come from the web client
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.WEB_BASE_URL.rstrip("/")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(TripPlannerError, trip_planner_error_handler)

# Include all API routes
app.include_router(api_router)

@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

@app.on_event("startup")
async def startup_event():
    await init_db()
    await init_redis_client()

@app.on_event("shutdown")
async def shutdown_event():
    await close_redis()
