"""
SearchCommand Bot Service - FastAPI application.

Hosts the Microsoft Teams Bot Framework webhook for the NuGet search bot.
"""
import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from search_command import __version__
from search_command.api.teams.bot import SearchCommandBot
from search_command.api.teams.routes import router as teams_router
from search_command.config import get_settings
from search_command.error_handlers import register_error_handlers
from search_command.services.nuget_client import NuGetSearchClient
from search_command.templates.card_templates import CardTemplateResolver

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown."""
    logger.info("SearchCommand bot starting up...")

    # Shared "WebClient" for NuGet search calls
    async with httpx.AsyncClient(timeout=settings.NUGET_SEARCH_TIMEOUT) as web_client:
        app.state.bot = SearchCommandBot(
            search_client=NuGetSearchClient(
                search_url=settings.NUGET_SEARCH_URL,
                http_client=web_client
            ),
            resolver=CardTemplateResolver(settings.template_paths)
        )
        yield

    logger.info("SearchCommand bot shutting down...")


app = FastAPI(
    title="SearchCommand Bot",
    description="Microsoft Teams message extension and commands for NuGet package search",
    version=__version__,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(teams_router)


@app.get("/health")
async def health_check():
    """Health check endpoint for container probes."""
    return {
        "status": "healthy",
        "service": "search-command-bot",
        "version": __version__
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "search-command-bot",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "messages": "/api/messages"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
