import copy
from types import SimpleNamespace

import pytest

from llm.base import BaseAgent
from llm.tools import Tool
from schemas.product import Product

CATALOG_TOOL = "Shopify_Storefront_Tools.search_shop_catalog"

SHOE: Product = {
    "id": "1",
    "handle": "shoe1",
    "title": "Red Runner",
    "description": "Lightweight running shoe",
    "productType": "Shoes",
    "vendor": "Acme",
    "tags": ["running", "red"],
    "priceRange": {
        "minVariantPrice": {"amount": "39.99", "currencyCode": "USD"},
        "maxVariantPrice": {"amount": "49.99", "currencyCode": "USD"},
    },
    "availableForSale": True,
}


def completion(content=None, tool_calls=None):
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def tool_call(call_id, name, arguments="{}"):
    return SimpleNamespace(
        id=call_id,
        type="function",
        function=SimpleNamespace(name=name, arguments=arguments),
    )


class FakeCompletions:
    def __init__(self, responses=(), parsed=None):
        self.responses = list(responses)
        self.parsed = parsed
        self.calls = []
        self.parse_calls = []

    async def create(self, **kwargs):
        self.calls.append(copy.deepcopy(kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def parse(self, **kwargs):
        self.parse_calls.append(kwargs)
        if isinstance(self.parsed, Exception):
            raise self.parsed
        message = SimpleNamespace(parsed=self.parsed, refusal=None if self.parsed else "I can't help with that")
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    def __init__(self, responses=(), parsed=None):
        self.completions = FakeCompletions(responses, parsed)
        self.chat = SimpleNamespace(completions=self.completions)


class FakeTool(Tool):
    def __init__(self, name, function_name=None, result="[]", error=None):
        self.name = name
        self.function_name = function_name or name.replace(".", "__")
        self.result = result
        self.error = error
        self.calls = []

    def parameters(self):
        return {"type": "object", "properties": {"query": {"type": "string"}}}

    async def invoke(self, arguments):
        self.calls.append(arguments)
        if self.error:
            raise self.error
        return self.result


class FakeAgent(BaseAgent):
    def __init__(self, outcome=None, error=None):
        self.outcome = outcome
        self.error = error
        self.queries = []

    async def run(self, query):
        self.queries.append(query)
        if self.error:
            raise self.error
        return self.outcome


@pytest.fixture
def shoe():
    return dict(SHOE)
