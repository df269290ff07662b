"""
Completion parser: cut a JSON candidate out of a raw LLM completion.

Models wrap their JSON in markdown fences, add a sentence of prose before or
after it, or both. This step is purely textual; the candidate may still be
invalid JSON and is handed to the repair pipeline as-is.
"""

import re

# ```json / ```JSON / bare ``` plus the line break that follows the marker
_FENCE_RE = re.compile(r"```(?:json|JSON)?[ \t]*\r?\n?")


def strip_code_fences(text: str) -> str:
    """Remove every markdown code-fence marker, keep what was inside."""
    return _FENCE_RE.sub("", text)


def extract_json_candidate(raw: str) -> str:
    """
    Return the span from the first '{' to the last '}' (inclusive).
    Without a usable brace pair the fence-stripped text is returned unchanged;
    strict parsing will reject it and the caller falls back to defaults.
    """
    if not raw:
        return ""
    text = strip_code_fences(raw)
    start_idx = text.find("{")
    end_idx = text.rfind("}")
    if start_idx == -1 or end_idx < start_idx:
        return text
    return text[start_idx:end_idx + 1]
