from functools import partial

from openai import AsyncOpenAI

from core.config import Settings
from llm.guard import GuardEvaluator
from llm.openai_agent import OpenAIAgent
from llm.prompts import build_system_prompt
from llm.tools import WebSearchTool, load_catalog_tools
from mcp_integration.client import MCPClient


def build_agent(settings: Settings, mcp_client: MCPClient) -> OpenAIAgent:
    """
    Construct the process-wide product agent.
    Called once at startup; the result is shared read-only across requests.
    """
    client = AsyncOpenAI(api_key=settings.openai_api_key)
    guard = GuardEvaluator(client, settings.guard_model) if settings.guardrail_enabled else None

    return OpenAIAgent(
        client=client,
        model=settings.llm_model,
        instructions=build_system_prompt(settings.catalog_namespace),
        tools=[WebSearchTool(client, settings.web_search_model)],
        catalog_source=partial(load_catalog_tools, mcp_client, settings.catalog_namespace),
        guard=guard,
        max_turns=settings.max_turns,
    )
