"""Parse JSON out of model replies."""

import json
import re
from typing import Any

from pydantic import BaseModel

from resumate.domain.errors import BackendUnavailableError

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def schema_instruction(schema: type[BaseModel]) -> str:
    """Prompt suffix for backends that cannot enforce a response schema."""
    return (
        "\n\nRespond ONLY with a JSON object matching this JSON Schema, no prose:\n"
        + json.dumps(schema.model_json_schema(), ensure_ascii=False)
    )


def parse_json_payload(text: str) -> Any:
    """Decode a reply that should be JSON, tolerating markdown fences and prose around it."""
    candidate = (text or "").strip()
    if not candidate:
        raise BackendUnavailableError("Empty response where JSON was expected")
    fenced = _FENCE_RE.match(candidate)
    if fenced:
        candidate = fenced.group(1)
    try:
        return json.loads(candidate)
    except json.JSONDecodeError:
        pass

    # Grounded replies sometimes wrap the object in a sentence.
    starts = [i for i in (candidate.find("{"), candidate.find("[")) if i >= 0]
    end = max(candidate.rfind("}"), candidate.rfind("]"))
    if starts and end > min(starts):
        try:
            return json.loads(candidate[min(starts) : end + 1])
        except json.JSONDecodeError:
            pass
    raise BackendUnavailableError(f"Malformed JSON response: {candidate[:200]!r}")
