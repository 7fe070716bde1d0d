from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from api.main import app_router
from core.config import Settings, get_cors_origins
from core.logging import setup_logging
import logging
import uvicorn

from llm.factory import build_agent
from mcp_integration.client import MCPClient
from dotenv import load_dotenv

# Load env vars
load_dotenv()

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    logger = logging.getLogger(__name__)
    logger.info("Application startup: Logging initialized")

    # Storefront catalog MCP client; reconnects lazily if the first attempt fails
    mcp_client = MCPClient(settings.mcp_server_url)
    try:
        await mcp_client.connect()
    except Exception as e:
        logger.error(f"Failed to connect to storefront MCP server: {e}")

    app.state.settings = settings
    app.state.mcp_client = mcp_client
    app.state.agent = build_agent(settings, mcp_client)

    yield

    await mcp_client.disconnect()
    logger.info("Application shutdown")

app = FastAPI(title="AI Shopping Assistant", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(app_router)


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000)
