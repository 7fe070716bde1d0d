from .agent import (
    AgentOutcome,
    AssistantMessage,
    ContentBlock,
    GuardrailTripped,
    GuardVerdict,
    OtherItem,
    OutputItem,
    RunResult,
    ToolMessage,
    parse_output_item,
)
from .chat import AgentResponse, ChatRequest, ErrorResponse
from .product import Product
