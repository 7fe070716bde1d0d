import json
import logging

from core.config import DEFAULT_CATALOG_NAMESPACE
from schemas.agent import AssistantMessage, OtherItem, RunResult, ToolMessage
from schemas.chat import AgentResponse
from schemas.product import Product

logger = logging.getLogger(__name__)

NO_RESPONSE_ANSWER = "Sorry, I am unable to provide a response."


def resolve_answer(message: AssistantMessage) -> str | None:
    """Text of an assistant message: the string itself, or its first output_text block."""
    if isinstance(message.content, str):
        return message.content
    for block in message.content:
        if block.type == "output_text":
            return block.text
    return None


def parse_tool_products(content: str) -> list[Product] | None:
    """Products carried by a catalog tool result, or None if the payload isn't a JSON array."""
    try:
        parsed = json.loads(content)
    except (TypeError, ValueError) as e:
        logger.warning(f"Could not parse tool result content: {e}")
        return None

    if not isinstance(parsed, list):
        logger.warning(f"Ignoring tool result that is not a list: {type(parsed).__name__}")
        return None
    return parsed


def extract_response(result: RunResult | None, catalog_namespace: str = DEFAULT_CATALOG_NAMESPACE) -> AgentResponse:
    """
    Turn an agent run into the public answer/products pair.

    The answer is the last non-empty assistant message; products are the
    concatenated arrays of every catalog tool result, in call order. Malformed
    tool payloads are skipped. Products are not deduplicated or validated.
    """
    answer = NO_RESPONSE_ANSWER
    products: list[Product] = []

    if result is None or not result.output:
        return AgentResponse(answer=answer, products=products)

    assistant_messages: list[AssistantMessage] = []
    tool_messages: list[ToolMessage] = []
    for item in result.output:
        if isinstance(item, AssistantMessage):
            if item.content:
                assistant_messages.append(item)
        elif isinstance(item, ToolMessage):
            if item.name.startswith(catalog_namespace):
                tool_messages.append(item)
        elif isinstance(item, OtherItem):
            continue
        else:
            raise TypeError(f"Unknown output item: {item!r}")

    if assistant_messages:
        text = resolve_answer(assistant_messages[-1])
        if text:
            answer = text

    for message in tool_messages:
        items = parse_tool_products(message.content)
        if items is not None:
            products.extend(items)

    return AgentResponse(answer=answer, products=products)
