from fastapi import APIRouter, Request

import logging

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/health")
async def health_check(req: Request):
    mcp_client = getattr(req.app.state, "mcp_client", None)
    catalog = "connected" if mcp_client is not None and mcp_client.session else "disconnected"
    logger.info(f"Health check endpoint called (catalog {catalog})")
    return {"status": "ok", "catalog": catalog}
