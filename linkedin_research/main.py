"""
LinkedIn Research Assistant - FastAPI Application

Discover companies and decision makers on LinkedIn from a pre-researched
catalog, optionally refreshed with live BrightData scrapes.
"""

import os

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import companies
from .services.scraping.brightdata_client import BRIGHTDATA_API_KEY

load_dotenv()

# Comma-separated list of dashboard origins
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

app = FastAPI(
    title="LinkedIn Research Assistant API",
    description="Find high-fit cloud companies and ICP lookalikes, with optional live LinkedIn data",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "LinkedIn Research Assistant API",
        "version": "1.0.0"
    }


@app.get("/health")
async def health_check():
    """Health check with live-scraping configuration."""
    return {
        "status": "healthy",
        "brightdata": "configured" if BRIGHTDATA_API_KEY else "not set"
    }


app.include_router(companies.router, tags=["Companies"])
