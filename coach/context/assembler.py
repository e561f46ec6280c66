"""
Prompt Assembler

Builds the payload that gets sent to the generative API.
Combines the caller's context pack, the recent thread and the new message.
"""

from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field

from config.settings import MAX_THREAD_TURNS
from .prompts import SystemPrompts
from .schema import ChatRequest, ContextPack, Thread, Turn, TurnRole


@dataclass
class GenerationConfig:
    """Fixed generation parameters"""
    temperature: float = 0.7
    max_output_tokens: int = 1200
    response_mime_type: Optional[str] = "text/plain"

    def to_dict(self) -> Dict[str, Any]:
        config: Dict[str, Any] = {
            "temperature": self.temperature,
            "maxOutputTokens": self.max_output_tokens,
        }
        if self.response_mime_type:
            config["responseMimeType"] = self.response_mime_type
        return config


@dataclass
class UpstreamPayload:
    """Request body for Gemini generateContent"""
    system_instruction: str
    turns: List[Turn]
    generation: GenerationConfig = field(default_factory=GenerationConfig)

    def to_request_body(self) -> Dict[str, Any]:
        """Convert to the JSON body of the upstream call"""
        return {
            "systemInstruction": {"parts": [{"text": self.system_instruction}]},
            "contents": [turn.to_content() for turn in self.turns],
            "generationConfig": self.generation.to_dict(),
        }


class PromptAssembler:
    """
    Assembles the upstream payload for one chat request.

    Usage:
        assembler = PromptAssembler()
        payload = assembler.assemble(
            user_message="How do I fix my bandeja?",
            context_pack=request.context_pack,
            thread=request.thread
        )
    """

    def __init__(
        self,
        generation: Optional[GenerationConfig] = None,
        max_turns: int = MAX_THREAD_TURNS
    ):
        self.prompts = SystemPrompts()
        self.generation = generation or GenerationConfig()
        self.max_turns = max_turns

    @classmethod
    def from_settings(cls, settings) -> "PromptAssembler":
        return cls(
            generation=GenerationConfig(
                temperature=settings.temperature,
                max_output_tokens=settings.max_output_tokens,
                response_mime_type=settings.response_mime_type,
            )
        )

    def build_system_instruction(self, context_pack: ContextPack) -> str:
        return self.prompts.get_system_instruction(context_pack)

    def normalize_thread(self, thread: Optional[Thread]) -> List[Turn]:
        """Most recent turns of the thread, oldest first"""
        if thread is None or self.max_turns <= 0:
            return []
        return list(thread.turns[-self.max_turns:])

    def assemble(
        self,
        user_message: str,
        context_pack: ContextPack,
        thread: Optional[Thread] = None
    ) -> UpstreamPayload:
        """
        Assemble the payload for the generative API.

        Args:
            user_message: The new message from the player
            context_pack: Coach persona, profile, match summary and constraints
            thread: Earlier turns of the conversation, if any

        Returns:
            UpstreamPayload with the history followed by the new user turn
        """
        turns = self.normalize_thread(thread)
        turns.append(Turn(role=TurnRole.USER, text=user_message))

        return UpstreamPayload(
            system_instruction=self.build_system_instruction(context_pack),
            turns=turns,
            generation=self.generation,
        )

    def assemble_request(self, request: ChatRequest) -> UpstreamPayload:
        return self.assemble(request.user_message, request.context_pack, request.thread)
