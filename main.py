"""
FLAMES Fantasy - JPL live match and fantasy squad API
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flames.config import settings
from flames.database import init_db
from flames.api.roster import router as roster_router
from flames.api.match import router as match_router, active_matches
from flames.api.squad import router as squad_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Initialize FastAPI app
app = FastAPI(
    title="FLAMES Fantasy",
    description="JPL live match simulation and fantasy squad API",
    version="0.1.0",
)

# CORS origins - configurable via environment variable
default_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

# Add custom origins from environment (comma-separated)
if settings.CORS_ORIGINS:
    default_origins.extend([o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()])

app.add_middleware(
    CORSMiddleware,
    allow_origins=default_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(roster_router, prefix="/api")
app.include_router(match_router, prefix="/api")
app.include_router(squad_router, prefix="/api")


@app.on_event("startup")
def startup_event():
    """Initialize database on startup"""
    init_db()


@app.on_event("shutdown")
def shutdown_event():
    """Stop any match clocks still ticking"""
    for match in active_matches.values():
        match.stop()


@app.get("/")
def root():
    """Health check endpoint"""
    return {
        "name": "FLAMES Fantasy API",
        "version": "0.1.0",
        "status": "running",
    }


@app.get("/api/health")
def health_check():
    """API health check"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
