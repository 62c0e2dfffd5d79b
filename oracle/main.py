"""Main FastAPI application."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from oracle.config import settings
from oracle.advisor import routes as advisor_routes
from oracle.simulation import routes as simulation_routes

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI app
app = FastAPI(
    title="Agency Oracle API",
    description="Predictive 12-month simulation of agency cash and staffing",
    version="0.1.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(simulation_routes.router, prefix=f"{settings.API_V1_PREFIX}/oracle", tags=["Oracle"])
app.include_router(advisor_routes.router, prefix=f"{settings.API_V1_PREFIX}/oracle", tags=["Oracle Advisor"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Agency Oracle API",
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "oracle.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
