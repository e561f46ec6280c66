"""
Reply Extractor

Turns a Gemini generateContent envelope into the reply text for the client.
"""

from typing import Any, Dict, List, Optional

from ..context.prompts import SystemPrompts


def _first_candidate(envelope: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(envelope, dict):
        return None
    candidates = envelope.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None
    candidate = candidates[0]
    return candidate if isinstance(candidate, dict) else None


def _candidate_parts(candidate: Optional[Dict[str, Any]]) -> List[Any]:
    if candidate is None:
        return []
    content = candidate.get("content")
    if not isinstance(content, dict):
        return []
    parts = content.get("parts")
    return parts if isinstance(parts, list) else []


def _part_text(part: Any) -> str:
    if not isinstance(part, dict):
        return ""
    text = part.get("text")
    if text is None:
        return ""
    return text if isinstance(text, str) else str(text)


def extract_reply(envelope: Any, fallback: str = SystemPrompts.FALLBACK_REPLY) -> str:
    """
    Extract the reply text from the first candidate.

    Part texts are joined in order without a separator and trimmed. A missing
    link anywhere in candidates[0].content.parts counts as no parts, and an
    empty result is replaced by `fallback`, so the reply is never empty.
    """
    parts = _candidate_parts(_first_candidate(envelope))
    reply = "".join(_part_text(part) for part in parts).strip()
    return reply or fallback


def build_debug_meta(envelope: Any, model: str) -> Dict[str, Any]:
    """Troubleshooting metadata for ?debug=1 responses"""
    candidate = _first_candidate(envelope)
    usage = envelope.get("usageMetadata") if isinstance(envelope, dict) else None

    return {
        "model": model,
        "finishReason": candidate.get("finishReason") if candidate else None,
        "usage": usage,
    }
