"""
Context module - Assembles the prompt for the LLM
"""

from .assembler import PromptAssembler, UpstreamPayload
from .prompts import SystemPrompts
from .schema import ChatRequest, ContextPack, Thread, Turn, parse_chat_request

__all__ = [
    "PromptAssembler",
    "UpstreamPayload",
    "SystemPrompts",
    "ChatRequest",
    "ContextPack",
    "Thread",
    "Turn",
    "parse_chat_request",
]
