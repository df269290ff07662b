"""Short preview text of an artifact, sized for 30-60 seconds of voice playback."""

from typing import Any, Dict

PREVIEW_SCRIPT_LINES = 6
FALLBACK_PREVIEW_CHARS = 500


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def preview_text(artifact: Dict[str, Any]) -> str:
    content = _text(artifact.get("content"))
    title = _text(artifact.get("title"))
    content_type = artifact.get("type")

    if content_type == "tiktok":
        # Hook + opening lines of the script, without the shot notes
        base = _text(artifact.get("hook")) or title
        lines = [line for line in content.split("\n") if "SHOT NOTES" not in line]
        return f"{base}\n\n" + "\n".join(lines[:PREVIEW_SCRIPT_LINES])

    if content_type == "twitter":
        # First tweet of the thread
        return content.split("\n\n")[0] or title

    if content_type == "linkedin":
        first_paragraph = content.split("\n\n")[0]
        return f"{title}\n\n{first_paragraph}"

    if content_type == "newsletter":
        # Subject line + opening sections
        return "\n\n".join(content.split("\n\n")[:3])

    return content[:FALLBACK_PREVIEW_CHARS]
