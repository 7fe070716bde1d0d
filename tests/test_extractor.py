import json

import pytest

from conftest import CATALOG_TOOL, SHOE
from llm.extractor import NO_RESPONSE_ANSWER, extract_response, parse_tool_products, resolve_answer
from schemas.agent import AssistantMessage, ContentBlock, OtherItem, RunResult, ToolMessage


def run(*items):
    return RunResult.from_raw(items)


@pytest.mark.parametrize("result", [None, RunResult(), RunResult.from_raw(None), RunResult.from_raw([])])
def test_empty_output_returns_sentinel(result):
    response = extract_response(result)
    assert response.answer == NO_RESPONSE_ANSWER
    assert response.products == []


def test_last_assistant_message_wins():
    result = run(
        {"role": "assistant", "content": "Could you tell me your size?"},
        {"role": "assistant", "content": "Here are some options:"},
    )
    assert extract_response(result).answer == "Here are some options:"


def test_empty_assistant_messages_are_skipped():
    result = run(
        {"role": "assistant", "content": "First answer"},
        {"role": "assistant", "content": ""},
        {"role": "assistant", "content": []},
    )
    assert extract_response(result).answer == "First answer"


def test_last_message_with_only_malformed_blocks_keeps_sentinel():
    result = run(
        {"role": "assistant", "content": "Could you tell me your size?"},
        {"role": "assistant", "content": [{"text": "no type"}, "stray"]},
    )
    assert extract_response(result).answer == NO_RESPONSE_ANSWER


def test_content_blocks_use_first_output_text():
    result = run({
        "role": "assistant",
        "content": [
            {"type": "refusal", "text": "nope"},
            {"type": "output_text", "text": "Found two jackets."},
            {"type": "output_text", "text": "ignored"},
        ],
    })
    assert extract_response(result).answer == "Found two jackets."


def test_blocks_without_output_text_keep_sentinel():
    result = run({"role": "assistant", "content": [{"type": "reasoning", "text": "thinking"}]})
    assert extract_response(result).answer == NO_RESPONSE_ANSWER


def test_products_concatenate_in_call_order_without_dedup():
    result = run(
        {"role": "tool", "name": CATALOG_TOOL, "content": '[{"id": "A"}]'},
        {"role": "assistant", "content": "Let me look for more."},
        {"role": "tool", "name": CATALOG_TOOL, "content": '[{"id": "B"}, {"id": "A"}]'},
    )
    assert extract_response(result).products == [{"id": "A"}, {"id": "B"}, {"id": "A"}]


@pytest.mark.parametrize("payload", ["not json", '{"products": [{"id": "X"}]}', '"text"', "null"])
def test_malformed_tool_payload_contributes_nothing(payload):
    result = run(
        {"role": "tool", "name": CATALOG_TOOL, "content": '[{"id": "A"}]'},
        {"role": "tool", "name": CATALOG_TOOL, "content": payload},
        {"role": "tool", "name": CATALOG_TOOL, "content": '[{"id": "B"}]'},
        {"role": "assistant", "content": "Two matches."},
    )
    response = extract_response(result)
    assert response.products == [{"id": "A"}, {"id": "B"}]
    assert response.answer == "Two matches."


def test_only_catalog_namespace_tools_contribute_products():
    result = run(
        {"role": "tool", "name": "web_search", "content": '[{"id": "web"}]'},
        {"role": "tool", "name": "Shopify_Storefront_Tools.get_product_details", "content": '[{"id": "P"}]'},
    )
    assert extract_response(result).products == [{"id": "P"}]


def test_custom_namespace():
    result = run({"role": "tool", "name": "Other_Store.search", "content": '[{"id": "O"}]'})
    assert extract_response(result).products == []
    assert extract_response(result, catalog_namespace="Other_Store").products == [{"id": "O"}]


def test_products_are_passed_through_untouched():
    odd = {"id": "9", "unexpected": {"nested": True}}
    result = run({"role": "tool", "name": CATALOG_TOOL, "content": json.dumps([SHOE, odd, "loose"])})
    assert extract_response(result).products == [SHOE, odd, "loose"]


def test_unknown_items_are_ignored():
    result = run(
        {"type": "web_search_call", "status": "completed"},
        "stray",
        {"role": "user", "content": "hi"},
        {"role": "assistant", "content": "Hello!"},
    )
    response = extract_response(result)
    assert response.answer == "Hello!"
    assert response.products == []


def test_extract_is_idempotent():
    result = run(
        {"role": "assistant", "content": "Here you go."},
        {"role": "tool", "name": CATALOG_TOOL, "content": '[{"id": "A"}]'},
    )
    assert extract_response(result) == extract_response(result)


def test_resolve_answer():
    assert resolve_answer(AssistantMessage("plain")) == "plain"
    assert resolve_answer(AssistantMessage((ContentBlock("output_text", "block"),))) == "block"
    assert resolve_answer(AssistantMessage((ContentBlock("other", "x"),))) is None


def test_parse_tool_products():
    assert parse_tool_products('[1, 2]') == [1, 2]
    assert parse_tool_products('[]') == []
    assert parse_tool_products('{"a": 1}') is None
    assert parse_tool_products('[1,') is None


def test_typed_items_are_accepted():
    result = RunResult(output=(
        OtherItem({"type": "mcp_list_tools"}),
        ToolMessage(name=CATALOG_TOOL, content='[{"id": "T"}]'),
        AssistantMessage("Typed."),
    ))
    response = extract_response(result)
    assert response.answer == "Typed."
    assert response.products == [{"id": "T"}]
