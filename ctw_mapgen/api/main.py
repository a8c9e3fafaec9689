"""FastAPI main application."""

from typing import Any, Dict, List, Union

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .. import __version__
from ..config import settings
from ..core import GeneratorConfig, LayoutGenerationError, generate_layout
from ..core.layout_analysis import summarize_layout
from ..export import layout_to_dict
from ..utils import configure_logging

configure_logging(settings.log_level, settings.log_format)

logger = structlog.get_logger()

app = FastAPI(
    title="Capture the Wool Layout Generator API",
    description="Procedural node-and-edge layouts for symmetric Capture the Wool maps",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ExportedLayout(BaseModel):
    """Flattened layout, as written by the JSON export."""

    width: Union[int, float]
    height: Union[int, float]
    nodes: List[Dict[str, Any]]
    edges: List[Dict[str, Any]]


class LayoutResponse(BaseModel):
    """Response for a generation request."""

    seed: int
    num_teams: int
    layout: ExportedLayout
    summary: Dict[str, Any] = Field(..., description="Per-team node/edge statistics")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Capture the Wool Layout Generator API",
        "version": __version__,
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post("/layouts/generate", response_model=LayoutResponse)
def generate(config: GeneratorConfig):
    """
    Generate a layout synchronously.

    Configurations that cannot produce a layout are rejected with 400 and
    the generator's message.
    """
    logger.info("Layout generation requested", seed=config.seed, num_teams=config.num_teams)
    try:
        layout = generate_layout(config)
    except LayoutGenerationError as e:
        logger.warning("Layout generation failed", seed=config.seed, error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    return LayoutResponse(
        seed=config.seed,
        num_teams=config.num_teams,
        layout=ExportedLayout(**layout_to_dict(layout)),
        summary=summarize_layout(layout),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
