"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload
"""
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.routes import categories, location, resources

# Create app
app = FastAPI(
    title="Resource Finder API",
    description="Search 211 social-service resources by category, keyword and location",
    version="0.1.0",
)

# CORS middleware for the web and mobile clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure properly for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(resources.router, prefix="/resources", tags=["resources"])
app.include_router(categories.router, prefix="/categories", tags=["categories"])
app.include_router(location.router, prefix="/location", tags=["location"])


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "Resource Finder API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
