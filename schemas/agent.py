from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field


class GuardVerdict(BaseModel):
    """Structured output of the query guard."""
    model_config = ConfigDict(extra="forbid")

    is_vague_or_nonsensical: bool = Field(..., description="True when the query is too vague or not natural language.")
    reasoning: str = Field(..., description="Short explanation of the verdict.")


@dataclass(frozen=True)
class ContentBlock:
    type: str
    text: str | None = None


@dataclass(frozen=True)
class AssistantMessage:
    content: str | tuple[ContentBlock, ...]
    role: str = field(default="assistant", init=False)


@dataclass(frozen=True)
class ToolMessage:
    name: str
    content: str
    role: str = field(default="tool", init=False)


@dataclass(frozen=True)
class OtherItem:
    """Any output item we do not understand. Kept for logging, ignored otherwise."""
    raw: Any


OutputItem = Union[AssistantMessage, ToolMessage, OtherItem]


def _parse_block(raw: Any) -> ContentBlock:
    # Malformed entries stay as untyped blocks so the message keeps its place
    if not isinstance(raw, Mapping) or not isinstance(raw.get("type"), str):
        return ContentBlock(type="")
    text = raw.get("text")
    return ContentBlock(type=raw["type"], text=text if isinstance(text, str) else None)


def parse_output_item(raw: Any) -> OutputItem:
    """Decide the variant of a raw output item from its role/type discriminators."""
    if isinstance(raw, (AssistantMessage, ToolMessage, OtherItem)):
        return raw
    if not isinstance(raw, Mapping):
        return OtherItem(raw)

    role = raw.get("role")
    content = raw.get("content")

    if role == "assistant":
        if isinstance(content, str):
            return AssistantMessage(content)
        if isinstance(content, (list, tuple)):
            return AssistantMessage(tuple(_parse_block(b) for b in content))
    elif role == "tool":
        name = raw.get("name")
        if isinstance(name, str) and isinstance(content, str):
            return ToolMessage(name=name, content=content)

    return OtherItem(raw)


@dataclass(frozen=True)
class RunResult:
    """Ordered output of a single agent run."""
    output: tuple[OutputItem, ...] = ()

    @classmethod
    def from_raw(cls, items: Iterable[Any] | None) -> "RunResult":
        if not items:
            return cls()
        return cls(output=tuple(parse_output_item(item) for item in items))


@dataclass(frozen=True)
class GuardrailTripped:
    """The query was rejected by the guard before any tool ran."""
    verdict: GuardVerdict


AgentOutcome = Union[RunResult, GuardrailTripped]
