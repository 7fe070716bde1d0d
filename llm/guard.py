import logging

from openai import AsyncOpenAI

from llm.base import AgentError
from llm.prompts import GUARD_PROMPT
from schemas.agent import GuardVerdict

logger = logging.getLogger(__name__)


class GuardEvaluator:
    """
    Decides whether a query is too vague or nonsensical to answer.
    The judgement is left entirely to the model; the output shape is
    enforced by structured outputs against GuardVerdict.
    """
    def __init__(self, client: AsyncOpenAI, model: str, instructions: str = GUARD_PROMPT):
        self.client = client
        self.model = model
        self.instructions = instructions

    async def evaluate(self, query: str) -> GuardVerdict:
        completion = await self.client.chat.completions.parse(
            model=self.model,
            messages=[
                {"role": "system", "content": self.instructions},
                {"role": "user", "content": query},
            ],
            response_format=GuardVerdict,
        )
        message = completion.choices[0].message
        verdict = message.parsed
        if verdict is None:
            raise AgentError(f"Guard returned no verdict: {getattr(message, 'refusal', None)}")

        logger.info(f"Guard verdict: vague_or_nonsensical={verdict.is_vague_or_nonsensical} ({verdict.reasoning})")
        return verdict
