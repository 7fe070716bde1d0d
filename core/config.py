from dataclasses import dataclass
import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_MCP_SERVER_URL = "https://testecomchatbot.myshopify.com/api/mcp"
DEFAULT_CATALOG_NAMESPACE = "Shopify_Storefront_Tools"
DEFAULT_MODEL = "gpt-4.1-mini"
DEFAULT_REQUEST_TIMEOUT = 30

_TRUTHY = {"1", "true", "yes", "on"}


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUTHY


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{value}'")


@dataclass(frozen=True)
class Settings:
    openai_api_key: str
    llm_model: str = DEFAULT_MODEL
    guard_model: str = DEFAULT_MODEL
    web_search_model: str = DEFAULT_MODEL
    mcp_server_url: str = DEFAULT_MCP_SERVER_URL
    catalog_namespace: str = DEFAULT_CATALOG_NAMESPACE
    guardrail_enabled: bool = True
    max_turns: int = 8
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment (and .env, if present)."""
        load_dotenv()

        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            logger.error("OPENAI_API_KEY is missing from environment variables")
            raise ValueError("OPENAI_API_KEY is not set in environment variables.")

        llm_model = os.getenv("LLM_MODEL", DEFAULT_MODEL)

        return cls(
            openai_api_key=api_key,
            llm_model=llm_model,
            guard_model=os.getenv("GUARD_MODEL", llm_model),
            web_search_model=os.getenv("WEB_SEARCH_MODEL", llm_model),
            mcp_server_url=os.getenv("SHOPIFY_MCP_SERVER_URL", DEFAULT_MCP_SERVER_URL),
            catalog_namespace=os.getenv("CATALOG_TOOL_NAMESPACE", DEFAULT_CATALOG_NAMESPACE),
            guardrail_enabled=_get_bool("GUARDRAIL_ENABLED", True),
            max_turns=_get_int("AGENT_MAX_TURNS", 8),
            request_timeout=_get_int("REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def get_cors_origins() -> list[str]:
    """Comma separated CORS_ORIGINS, defaulting to all origins."""
    origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    return origins or ["*"]
