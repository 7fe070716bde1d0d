from typing import Any

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    message: str | None = Field(None, description="The user's query or input message.", examples=["red running shoes under $50"])


class AgentResponse(BaseModel):
    answer: str = Field(..., description="Short natural-language answer from the assistant.")
    products: list[Any] = Field(default_factory=list, description="Product records returned by the catalog search tool, in call order.")


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human readable error summary.")
    message: str | None = Field(None, description="Underlying error detail, if any.")
