from abc import ABC, abstractmethod
import json
import logging
import re
from typing import Any

from openai import AsyncOpenAI

from mcp_integration.client import MCPClient

logger = logging.getLogger(__name__)

# Locale every storefront call runs under
DEFAULT_LOCALE_CONTEXT = {"country": "US", "language": "EN"}

_UNSAFE_FUNCTION_CHARS = re.compile(r"[^A-Za-z0-9_-]")


class Tool(ABC):
    """A capability the model may call during a run."""

    name: str
    function_name: str
    description: str = ""

    @abstractmethod
    def parameters(self) -> dict:
        raise NotImplementedError

    @abstractmethod
    async def invoke(self, arguments: dict) -> str:
        """Run the tool and return its result as text."""
        raise NotImplementedError

    def definition(self) -> dict:
        return {
            "type": "function",
            "function": {
                "name": self.function_name,
                "description": self.description,
                "parameters": self.parameters(),
            },
        }


class WebSearchTool(Tool):
    """Generic web search, backed by the Responses API hosted search tool."""

    name = "web_search"
    function_name = "web_search"
    description = "Search the web for external product reviews or comparisons."

    def __init__(self, client: AsyncOpenAI, model: str):
        self.client = client
        self.model = model

    def parameters(self) -> dict:
        return {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "What to search the web for."},
            },
            "required": ["query"],
        }

    async def invoke(self, arguments: dict) -> str:
        query = arguments.get("query")
        if not query:
            return json.dumps({"error": "Missing 'query' argument"})

        response = await self.client.responses.create(
            model=self.model,
            tools=[{"type": "web_search_preview"}],
            input=query,
        )
        return response.output_text


def _result_text(result: Any) -> str:
    if not hasattr(result, "content"):
        return str(result)

    text = ""
    for content in result.content:
        if hasattr(content, "text"):
            text += content.text
        elif isinstance(content, dict) and "text" in content:
            text += content["text"]
        else:
            text += str(content)
    return text


class CatalogTool(Tool):
    """One tool of the storefront MCP server, exposed under the catalog namespace."""

    def __init__(self, client: MCPClient, namespace: str, tool: Any):
        self.client = client
        self.remote_name = tool.name
        self.name = f"{namespace}.{tool.name}"
        self.function_name = _UNSAFE_FUNCTION_CHARS.sub("_", f"{namespace}__{tool.name}")
        self.description = tool.description or ""
        self.input_schema = tool.inputSchema or {"type": "object", "properties": {}}

    def parameters(self) -> dict:
        return self.input_schema

    async def invoke(self, arguments: dict) -> str:
        arguments = dict(arguments)
        properties = self.input_schema.get("properties") or {}
        if "context" in properties and "context" not in arguments:
            arguments["context"] = dict(DEFAULT_LOCALE_CONTEXT)

        result = await self.client.call_tool(self.remote_name, arguments)
        text = _result_text(result)
        if getattr(result, "isError", False):
            logger.warning(f"Catalog tool '{self.name}' reported an error: {text}")
            return json.dumps({"error": text})
        return text


async def load_catalog_tools(client: MCPClient, namespace: str) -> list[CatalogTool]:
    """List the storefront server's tools, all under the same namespace."""
    mcp_tools = await client.list_tools()
    return [CatalogTool(client, namespace, tool) for tool in mcp_tools]
