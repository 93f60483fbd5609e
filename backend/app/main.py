"""
backend/app/main.py

FastAPI Entrypoint.
Serves the DupeIt request form backend.

Responsibilities:
- Initialize FastAPI app
- Register routers (submissions, sessions)
- Setup middleware (CORS)
- Health check endpoint
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.routes import sessions, submissions

app = FastAPI(
    title="DupeIt Backend",
    description="API for collecting product dupe requests",
    version="0.1.0"
)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(submissions.router)
app.include_router(sessions.router)

@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "DupeIt Backend is running"}
