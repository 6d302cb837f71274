"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from proofpack.api import router as api_router
from proofpack.core.config import get_settings

app = FastAPI(
    title=get_settings().API_TITLE,
    description="Proof Pack health scoring, gap detection and remediation planning",
    version="0.1.0",
)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "ok"}, status_code=200)


# Include v1 API router
app.include_router(api_router, prefix="/v1", tags=["v1"])
