# record_portal/api/routers/health.py

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request

from record_portal.api.dependencies import get_correlation_id

router = APIRouter()


@router.get("/health")
async def health(
    request: Request,
    correlation_id: Annotated[str, Depends(get_correlation_id)],
):
    """Health check with correlation ID and the size of the in-memory store."""
    settings = request.app.state.settings
    return {
        "status": "ok",
        "correlation_id": correlation_id,
        "environment": settings.environment,
        "version": settings.version,
        "record_count": len(request.app.state.record_store.records()),
    }


@router.get("/metrics")
async def metrics(request: Request):
    if not request.app.state.settings.enable_metrics:
        raise HTTPException(status_code=404, detail="Metrics are disabled")
    return request.app.state.metrics.export_metrics()
