"""
JSON repair pipeline for LLM completions.

Models are asked to escape line breaks but regularly don't, leave trailing
commas behind, or break a single array entry badly enough to poison the whole
document. The stages below run in order, least destructive first, and stop at
the first strict parse that succeeds:

    strict           json.loads as-is
    escaped          raw control characters escaped inside known string fields
    trailing_commas  ", }" / ", ]" collapsed (outside string literals)
    salvaged         each entry of a named array parsed on its own, broken
                     entries dropped

Every stage is a plain str -> str (or str -> list) function so it can be
tested in isolation. Nothing here raises on bad input.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# String fields whose values routinely carry multi-line text
REPAIRABLE_FIELDS = ("content", "title", "shareUrl")

STAGE_STRICT = "strict"
STAGE_ESCAPED = "escaped"
STAGE_TRAILING_COMMAS = "trailing_commas"
STAGE_SALVAGED = "salvaged"
STAGE_FAILED = "failed"

_CONTROL_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}
_CONTROL_ESCAPE_RE = re.compile(r"[\n\r\t]")
# U+0000..U+001F minus \t (09), \n (0A), \r (0D)
_OTHER_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

# Start of an object entry: '{' followed by a key
_OBJECT_START_RE = re.compile(r'\{\s*"')
# Separators between array entries
_ARRAY_GAP_RE = re.compile(r"[\s,]*")

_field_patterns: Dict[Tuple[str, ...], "re.Pattern[str]"] = {}


@dataclass(frozen=True)
class RepairOutcome:
    """Parsed value (None when every stage failed) and the stage that produced it."""

    value: Any
    stage: str

    @property
    def ok(self) -> bool:
        return self.stage != STAGE_FAILED


def _loads(text: str) -> Tuple[bool, Any]:
    try:
        return True, json.loads(text)
    except ValueError:
        return False, None


def _field_pattern(fields: Sequence[str]) -> "re.Pattern[str]":
    """"<field>" : "<value>" where value may contain escaped quotes and raw newlines."""
    key = tuple(fields)
    if key not in _field_patterns:
        names = "|".join(re.escape(f) for f in key)
        _field_patterns[key] = re.compile(
            r'"(' + names + r')"(\s*:\s*)"((?:[^"\\]|\\.)*)"',
            re.DOTALL,
        )
    return _field_patterns[key]


def escape_control_characters(value: str) -> str:
    """Escape raw newline/CR/tab, drop every other control character."""
    value = _CONTROL_ESCAPE_RE.sub(lambda m: _CONTROL_ESCAPES[m.group(0)], value)
    return _OTHER_CONTROL_RE.sub("", value)


def escape_field_newlines(document: str, fields: Sequence[str] = REPAIRABLE_FIELDS) -> str:
    """Stage 2: fix control characters inside the values of the named string fields only."""
    def _fix(match: "re.Match[str]") -> str:
        name, separator, value = match.group(1), match.group(2), match.group(3)
        return f'"{name}"{separator}"{escape_control_characters(value)}"'

    return _field_pattern(fields).sub(_fix, document)


def remove_trailing_commas(document: str) -> str:
    """Stage 3: drop commas that directly precede '}' or ']' (whitespace allowed in between)."""
    out: List[str] = []
    in_string = False
    escape_next = False
    n = len(document)
    i = 0
    while i < n:
        char = document[i]
        if in_string:
            out.append(char)
            if escape_next:
                escape_next = False
            elif char == "\\":
                escape_next = True
            elif char == '"':
                in_string = False
            i += 1
            continue

        if char == '"':
            in_string = True
        elif char == ",":
            j = i + 1
            while j < n and document[j] in " \t\r\n":
                j += 1
            if j < n and document[j] in "}]":
                i += 1
                continue
        out.append(char)
        i += 1
    return "".join(out)


def _array_start(document: str, array_key: str) -> Optional[int]:
    match = re.search(r'"' + re.escape(array_key) + r'"\s*:\s*\[', document)
    return match.end() if match else None


def _object_end(document: str, start: int) -> Optional[int]:
    """Index of the '}' closing the object opened at `start`; None if it never closes."""
    depth = 0
    in_string = False
    escape_next = False

    for i in range(start, len(document)):
        char = document[i]
        if in_string:
            if escape_next:
                escape_next = False
            elif char == "\\":
                escape_next = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char in "{[":
            depth += 1
        elif char in "}]":
            depth -= 1
            if depth == 0:
                return i if char == "}" else None
    return None


def salvage_array(
    document: str,
    array_key: str,
    fields: Sequence[str] = REPAIRABLE_FIELDS,
    required_key: str = "title",
) -> Optional[List[Dict[str, Any]]]:
    """
    Stage 4: parse each entry of `"<array_key>": [` independently.

    A well-formed entry is consumed whole (braces inside strings ignored) and
    kept when it has `required_key`. An entry that fails to parse, or never
    closes, is dropped and the scan restarts at the next `{"` after its
    opening brace, so an unbalanced quote cannot take later entries with it.
    None when nothing could be recovered.
    """
    pos = _array_start(document, array_key)
    if pos is None:
        return None

    salvaged: List[Dict[str, Any]] = []
    dropped = 0
    while True:
        gap = _ARRAY_GAP_RE.match(document, pos)
        if gap.end() >= len(document) or document[gap.end()] == "]":
            break  # end of the array itself
        start_match = _OBJECT_START_RE.search(document, pos)
        if not start_match:
            break
        start = start_match.start()

        end = _object_end(document, start)
        if end is not None:
            candidate = document[start:end + 1]
            ok, value = _loads(remove_trailing_commas(escape_field_newlines(candidate, fields)))
            if ok and isinstance(value, dict):
                if required_key in value:
                    salvaged.append(value)
                pos = end + 1
                continue

        dropped += 1
        logger.debug("Dropped unparseable '%s' entry at offset %d", array_key, start)
        pos = start + 1

    if not salvaged:
        return None
    logger.info("Salvaged %d '%s' entries (%d dropped)", len(salvaged), array_key, dropped)
    return salvaged


def repair_and_parse(
    document: str,
    array_key: Optional[str] = None,
    fields: Sequence[str] = REPAIRABLE_FIELDS,
) -> RepairOutcome:
    """
    Run the stages in order and return the first successful parse.
    Salvage only runs when `array_key` names the array to recover entries from.
    """
    ok, value = _loads(document)
    if ok:
        return RepairOutcome(value, STAGE_STRICT)

    logger.info("Initial parse failed, escaping control characters in string fields...")
    escaped = escape_field_newlines(document, fields)
    ok, value = _loads(escaped)
    if ok:
        return RepairOutcome(value, STAGE_ESCAPED)

    logger.info("Still invalid, removing trailing commas...")
    cleaned = remove_trailing_commas(escaped)
    ok, value = _loads(cleaned)
    if ok:
        return RepairOutcome(value, STAGE_TRAILING_COMMAS)

    if array_key:
        salvaged = salvage_array(document, array_key, fields)
        if salvaged is not None:
            return RepairOutcome({array_key: salvaged}, STAGE_SALVAGED)

    return RepairOutcome(None, STAGE_FAILED)
