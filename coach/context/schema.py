"""
Chat Request Schema

Typed records for the coach chat payload, plus the functions that parse the
loosely-typed JSON sent by clients into them.

Parsing never rejects a malformed context pack or thread. Missing values get
defaults, unknown roles become "model" and any text value is stringified.
Only the two required top-level fields can fail validation.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from enum import Enum

from config.settings import MAX_THREAD_TURNS
from ..errors import InvalidRequestError


class TurnRole(str, Enum):
    USER = "user"
    MODEL = "model"


class Turn(BaseModel):
    """One message of the conversation history"""
    role: TurnRole
    text: str = ""

    def to_content(self) -> Dict[str, Any]:
        """Gemini `contents[]` entry"""
        return {"role": self.role.value, "parts": [{"text": self.text}]}


class Thread(BaseModel):
    turns: List[Turn] = Field(default_factory=list)


class ContextPack(BaseModel):
    """
    Coaching context supplied by the client on every request.

    Example:
        coachPersona: "You are a friendly padel coach."
        playerProfile: "Intermediate, left side, strong volley."
        recentMatchesSummary: "Lost 2 of the last 3, struggled with lobs."
        constraints: "Keep answers under 120 words."
    """
    coach_persona: str = Field(default="", alias="coachPersona")
    player_profile: str = Field(default="", alias="playerProfile")
    recent_matches_summary: str = Field(default="", alias="recentMatchesSummary")
    constraints: str = Field(default="")

    class Config:
        populate_by_name = True


class ChatRequest(BaseModel):
    user_message: str = Field(..., alias="userMessage")
    context_pack: ContextPack = Field(..., alias="contextPack")
    thread: Optional[Thread] = None

    class Config:
        populate_by_name = True


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_turn(raw: Any) -> Turn:
    """
    Coerce an arbitrary value into a Turn.

    Role is "user" only for the exact string "user"; everything else,
    including a missing role, is "model". Text is stringified.
    """
    if not isinstance(raw, dict):
        return Turn(role=TurnRole.MODEL, text="")

    role = TurnRole.USER if raw.get("role") == "user" else TurnRole.MODEL
    return Turn(role=role, text=_as_text(raw.get("text")))


def parse_thread(raw: Any, max_turns: int = MAX_THREAD_TURNS) -> Thread:
    """Keep the last `max_turns` turns of a raw thread, oldest first"""
    if not isinstance(raw, dict):
        return Thread()

    turns = raw.get("turns")
    if not isinstance(turns, list):
        return Thread()

    recent = turns[-max_turns:] if max_turns > 0 else []
    return Thread(turns=[parse_turn(t) for t in recent])


def parse_context_pack(raw: Any) -> ContextPack:
    if not isinstance(raw, dict):
        raw = {}

    return ContextPack(
        coach_persona=_as_text(raw.get("coachPersona")),
        player_profile=_as_text(raw.get("playerProfile")),
        recent_matches_summary=_as_text(raw.get("recentMatchesSummary")),
        constraints=_as_text(raw.get("constraints")),
    )


def parse_chat_request(body: Any) -> ChatRequest:
    """
    Validate a decoded JSON body.

    Raises:
        InvalidRequestError: userMessage is missing, empty or not a string,
            or contextPack is missing or not an object (checked in that order)
    """
    if not isinstance(body, dict):
        body = {}

    user_message = body.get("userMessage")
    if not user_message or not isinstance(user_message, str):
        raise InvalidRequestError("Missing or invalid userMessage")

    context_pack = body.get("contextPack")
    # Empty objects and arrays pass; an array renders as a blank pack
    if not isinstance(context_pack, (dict, list)):
        raise InvalidRequestError("Missing or invalid contextPack")

    thread = body.get("thread")
    return ChatRequest(
        user_message=user_message,
        context_pack=parse_context_pack(context_pack),
        thread=parse_thread(thread) if thread is not None else None,
    )
