from collections.abc import Awaitable, Callable, Sequence
import json
import logging

from openai import AsyncOpenAI

from llm.base import AgentError, BaseAgent
from llm.guard import GuardEvaluator
from llm.tools import Tool
from schemas.agent import AgentOutcome, AssistantMessage, GuardrailTripped, OutputItem, RunResult, ToolMessage

logger = logging.getLogger(__name__)

ToolSource = Callable[[], Awaitable[Sequence[Tool]]]


class OpenAIAgent(BaseAgent):
    """
    Tool-using agent on top of chat completions.

    Each run is single-shot: the guard (if any) runs first, then the model is
    called in a loop, executing requested tools sequentially until it answers
    without asking for more tools. Every assistant text and tool result is
    recorded, in order, in the returned RunResult.
    """
    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        instructions: str,
        tools: Sequence[Tool] = (),
        catalog_source: ToolSource | None = None,
        guard: GuardEvaluator | None = None,
        max_turns: int = 8,
    ):
        self.client = client
        self.model = model
        self.instructions = instructions
        self.tools = tuple(tools)
        self.catalog_source = catalog_source
        self.guard = guard
        self.max_turns = max_turns

    async def _collect_tools(self) -> dict[str, Tool]:
        tools = list(self.tools)
        if self.catalog_source:
            tools.extend(await self.catalog_source())
        return {tool.function_name: tool for tool in tools}

    async def _execute(self, tool: Tool | None, function_name: str, raw_arguments: str) -> str:
        if tool is None:
            return json.dumps({"error": f"Tool {function_name} not found"})

        try:
            arguments = json.loads(raw_arguments or "{}")
        except json.JSONDecodeError as e:
            logger.error(f"Invalid arguments for tool {tool.name}: {e}")
            return json.dumps({"error": f"Invalid arguments: {e}"})

        logger.info(f"Executing tool: {tool.name}")
        try:
            return await tool.invoke(arguments)
        except Exception as e:
            # Tool failures are reported back to the model instead of aborting the run
            logger.error(f"Tool execution failed: {tool.name}: {e}")
            return json.dumps({"error": str(e)})

    async def run(self, query: str) -> AgentOutcome:
        if self.guard:
            verdict = await self.guard.evaluate(query)
            if verdict.is_vague_or_nonsensical:
                return GuardrailTripped(verdict)

        tools = await self._collect_tools()
        definitions = [tool.definition() for tool in tools.values()]

        messages = [
            {"role": "system", "content": self.instructions},
            {"role": "user", "content": query},
        ]
        output: list[OutputItem] = []

        for turn in range(self.max_turns):
            logger.info(f"Sending request to OpenAI with {len(definitions)} tools (turn {turn + 1})")
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                tools=definitions or None,
            )

            response_message = response.choices[0].message
            tool_calls = response_message.tool_calls or []

            if response_message.content:
                output.append(AssistantMessage(response_message.content))

            if not tool_calls:
                return RunResult(output=tuple(output))

            messages.append({
                "role": "assistant",
                "content": response_message.content,
                "tool_calls": [
                    {
                        "id": call.id,
                        "type": "function",
                        "function": {"name": call.function.name, "arguments": call.function.arguments},
                    }
                    for call in tool_calls
                ],
            })

            for call in tool_calls:
                function_name = call.function.name
                tool = tools.get(function_name)
                content = await self._execute(tool, function_name, call.function.arguments)

                output.append(ToolMessage(name=tool.name if tool else function_name, content=content))
                messages.append({
                    "tool_call_id": call.id,
                    "role": "tool",
                    "content": content,
                })

        raise AgentError(f"Agent exceeded {self.max_turns} turns without a final answer")
