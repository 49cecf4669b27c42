"""Tests for LLM response cleaning."""
import pytest

from protogen.llm.parser import (
    accumulate_ndjson,
    clean_llm_output,
    extract_json_object,
    remove_think_tags,
    strip_json_fences,
)


def test_remove_think_tags_is_case_insensitive():
    text = "<THINK>pondering\nmore</think>  answer  "
    assert remove_think_tags(text) == "answer"


def test_clean_llm_output_returns_first_code_block():
    text = "<think>plan</think>\nHere you go:\n```javascript\nconst a = 1;\n```\n```js\nsecond\n```"
    assert clean_llm_output(text) == "const a = 1;"


def test_clean_llm_output_without_fence_returns_trimmed_text():
    assert clean_llm_output("  plain text \n") == "plain text"


def test_strip_json_fences():
    assert strip_json_fences('```json\n{"a": 1}\n```') == '{"a": 1}'


def test_extract_json_object_finds_outer_object():
    text = 'Sure! {"personas": [{"name": "Admin"}], "goals": []} Hope it helps.'
    assert extract_json_object(text) == {"personas": [{"name": "Admin"}], "goals": []}


def test_extract_json_object_rejects_garbage():
    with pytest.raises(ValueError):
        extract_json_object("no json here")
    with pytest.raises(ValueError):
        extract_json_object("")


def test_accumulate_ndjson_stops_at_done():
    lines = [
        '{"response": "Hel", "done": false}',
        "",
        "not json",
        '{"response": "lo", "done": true}',
        '{"response": " ignored"}',
    ]
    assert accumulate_ndjson(lines) == "Hello"
