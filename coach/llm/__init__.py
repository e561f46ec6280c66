"""
LLM module - Talks to the generative API and reads its replies
"""

from .gemini import GeminiClient
from .reply import build_debug_meta, extract_reply

__all__ = ["GeminiClient", "build_debug_meta", "extract_reply"]
