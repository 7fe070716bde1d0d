import logging

from core.config import DEFAULT_CATALOG_NAMESPACE
from llm.base import BaseAgent
from llm.extractor import extract_response
from schemas.agent import GuardrailTripped
from schemas.chat import AgentResponse

logger = logging.getLogger(__name__)

VAGUE_QUERY_ANSWER = (
    "Your query is a bit too vague. Could you please provide more details about what you are looking for?"
)
UNEXPECTED_ERROR_ANSWER = "An unexpected error occurred. Please try again."


async def run_agent(agent: BaseAgent, query: str, catalog_namespace: str = DEFAULT_CATALOG_NAMESPACE) -> AgentResponse:
    """
    Answer a single query. Never raises: guard rejections become a clarification
    prompt, any other failure becomes a generic apology. No retries.
    """
    try:
        outcome = await agent.run(query)
    except Exception:
        logger.exception("Error running agent")
        return AgentResponse(answer=UNEXPECTED_ERROR_ANSWER, products=[])

    if isinstance(outcome, GuardrailTripped):
        logger.info(f"Query rejected by guard: {outcome.verdict.reasoning}")
        return AgentResponse(answer=VAGUE_QUERY_ANSWER, products=[])

    try:
        return extract_response(outcome, catalog_namespace)
    except Exception:
        logger.exception("Error extracting agent response")
        return AgentResponse(answer=UNEXPECTED_ERROR_ANSWER, products=[])
