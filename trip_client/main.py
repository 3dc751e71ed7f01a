"""
FastAPI application entry point.

Assembles the FastAPI app serving trip sessions to the presentation layer.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trip_client.session.session_api import router as session_router
from trip_client.shared.config import DEFAULT_CONFIG
from trip_client.shared.logging import configure_logging


# Text or JSON output per TRIP_LOG_FORMAT; replaces any handlers already installed
configure_logging(DEFAULT_CONFIG)


app = FastAPI(
    title="Trip Client",
    description="Trip screen sessions: itinerary, editing and guest confirmation",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(session_router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Trip Client",
        "version": "0.1.0",
        "endpoints": {
            "sessions": "/api/trip-sessions",
        },
    }


@app.get("/health")
async def health():
    """Global health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
