from abc import ABC, abstractmethod

from schemas.agent import AgentOutcome


class AgentError(Exception):
    """The agent could not produce a run result."""


class BaseAgent(ABC):
    @abstractmethod
    async def run(self, query: str) -> AgentOutcome:
        """
        Run the agent once for a single query.
        Returns a RunResult, or GuardrailTripped when the query is rejected up front.
        """
        raise NotImplementedError
