from contextlib import AsyncExitStack
from mcp.client.streamable_http import streamablehttp_client
from mcp.client.session import ClientSession
import logging
import asyncio
import time

logger = logging.getLogger(__name__)

# Errors after which the session is dropped, so the next call reconnects
_CONNECTION_ERROR_HINTS = ("connection", "broken pipe", "closed")


class MCPClient:
    """
    Manages the connection to the storefront MCP server over streamable HTTP.
    """
    def __init__(self, server_url: str):
        self.server_url = server_url
        self.session: ClientSession | None = None
        self._exit_stack: AsyncExitStack | None = None
        self._lock = asyncio.Lock()

    async def connect(self):
        """Establish connection to the MCP server."""
        try:
            self._exit_stack = AsyncExitStack()

            read_stream, write_stream, _ = await self._exit_stack.enter_async_context(
                streamablehttp_client(self.server_url)
            )

            self.session = await self._exit_stack.enter_async_context(
                ClientSession(read_stream, write_stream)
            )

            await self.session.initialize()
            logger.info(f"Connected to MCP server at {self.server_url}")

        except Exception as e:
            logger.error(f"Failed to connect to MCP server: {e}")
            await self.disconnect()
            raise

    async def disconnect(self):
        """Close the connection."""
        if self._exit_stack:
            await self._exit_stack.aclose()
            self._exit_stack = None
        self.session = None
        logger.info("Disconnected from MCP server")

    async def ensure_connected(self):
        """Ensure the MCP client is connected, reconnecting if necessary."""
        if self.session:
            return

        async with self._lock:
            # Another task may have reconnected while we waited
            if self.session:
                return

            logger.warning("MCP Client not connected. Attempting to reconnect...")
            try:
                await self.connect()
            except Exception as e:
                logger.error(f"Reconnection failed: {e}")
                raise

    async def list_tools(self):
        """List available tools from the MCP server."""
        await self.ensure_connected()

        try:
            result = await self.session.list_tools()
            return result.tools
        except Exception as e:
            # list_tools is read-only, so a blind retry is safe
            logger.warning(f"Error during list_tools ({type(e).__name__}: {e}). Reconnecting and retrying...")
            await self.disconnect()
            await self.ensure_connected()

            try:
                result = await self.session.list_tools()
                return result.tools
            except Exception as retry_e:
                logger.error(f"Retry failed for list_tools: {retry_e}")
                raise retry_e

    async def call_tool(self, name: str, arguments: dict):
        """Call a specific tool on the MCP server."""
        await self.ensure_connected()

        arguments = dict(arguments)
        start_time = time.perf_counter()
        logger.info(f"Calling MCP tool '{name}' with args: {arguments}")

        try:
            result = await self.session.call_tool(name, arguments)
            duration = time.perf_counter() - start_time
            logger.info(f"MCP tool '{name}' executed in {duration:.3f}s")
            return result
        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.error(f"MCP tool '{name}' failed after {duration:.3f}s: {e}")
            # Tool calls may have side effects, so they are never retried here
            if any(hint in str(e).lower() for hint in _CONNECTION_ERROR_HINTS):
                logger.warning("Dropping MCP session after connection error")
                await self.disconnect()
            raise
