import json
import re
from typing import Any, Dict, Iterable


THINK_BLOCK_RE = re.compile(r"<think>[\s\S]*?</think>", re.IGNORECASE)
CODE_BLOCK_RE = re.compile(r"```(?:\w*\n|\n)?([\s\S]*?)```")


# ============================================================
# RESPONSE CLEANING
# ============================================================

def remove_think_tags(text: str) -> str:
    """Drop <think>...</think> reasoning blocks and trim the result."""
    return THINK_BLOCK_RE.sub("", text or "").strip()


def clean_llm_output(text: str) -> str:
    """
    Normalise raw model output into the payload the caller asked for.

    Reasoning blocks are removed first. If a fenced code block remains,
    only the body of the first one is returned; otherwise the trimmed
    text is returned unchanged.
    """
    text = remove_think_tags(text)

    match = CODE_BLOCK_RE.search(text)
    if match and match.group(1):
        return match.group(1).strip()

    return text


def strip_json_fences(text: str) -> str:
    cleaned = re.sub(r"^```json\s*", "", text.strip(), flags=re.IGNORECASE)
    cleaned = re.sub(r"\s*```$", "", cleaned)
    return cleaned.strip("`")


# ============================================================
# JSON EXTRACTION (LLM TRUST BOUNDARY)
# ============================================================

def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Parse the outermost JSON object found in model output.

    Raises ValueError when nothing parseable is present.
    """
    if not text or not isinstance(text, str):
        raise ValueError("Empty model output")

    content = text.strip()
    match = re.search(r"\{[\s\S]*\}", content)
    if match:
        content = match.group(0)

    content = re.sub(r"```json\n?", "", content)
    content = re.sub(r"```\n?", "", content).strip()

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Model output is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Model output is not a JSON object")
    return data


# ============================================================
# STREAMED RESPONSES
# ============================================================

def accumulate_ndjson(lines: Iterable[str]) -> str:
    """Concatenate the `response` fragments of a streamed NDJSON reply."""
    parts = []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        try:
            chunk = json.loads(line)
        except json.JSONDecodeError:
            continue
        if not isinstance(chunk, dict):
            continue
        parts.append(chunk.get("response") or "")
        if chunk.get("done"):
            break
    return "".join(parts)
