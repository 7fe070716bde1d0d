from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
import asyncio
import logging

from core.config import DEFAULT_CATALOG_NAMESPACE, DEFAULT_REQUEST_TIMEOUT
from llm.orchestrator import UNEXPECTED_ERROR_ANSWER, run_agent
from schemas.chat import AgentResponse, ChatRequest, ErrorResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/",
    response_model=AgentResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(request: ChatRequest, req: Request):
    if not request.message:
        return JSONResponse(status_code=400, content={"error": "Message is required"})

    logger.info(f"Received chat message: {request.message}")

    settings = getattr(req.app.state, "settings", None)
    timeout = settings.request_timeout if settings else DEFAULT_REQUEST_TIMEOUT
    namespace = settings.catalog_namespace if settings else DEFAULT_CATALOG_NAMESPACE

    try:
        agent = req.app.state.agent
        return await asyncio.wait_for(
            run_agent(agent, request.message, namespace),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        logger.warning(f"Agent run exceeded {timeout}s, request abandoned")
        return AgentResponse(answer=UNEXPECTED_ERROR_ANSWER, products=[])
    except Exception as e:
        logger.error(f"Chat API error: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "An error occurred while processing your request.", "message": str(e)},
        )
