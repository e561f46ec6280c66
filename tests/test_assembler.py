"""
Tests for prompt assembly
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import Settings
from coach.context.assembler import GenerationConfig, PromptAssembler
from coach.context.schema import ContextPack, TurnRole, parse_context_pack, parse_thread


class TestPromptAssembler:
    """Tests for PromptAssembler"""

    def setup_method(self):
        self.assembler = PromptAssembler()

    def test_empty_context_pack(self):
        """Blank fields keep all four sections"""
        system = self.assembler.build_system_instruction(ContextPack())
        assert system == "Recent matches:\n\n\nConstraints:"

    def test_full_context_pack(self):
        pack = parse_context_pack({
            "coachPersona": "You are a padel coach.",
            "playerProfile": "Left side player.",
            "recentMatchesSummary": "Won 3 of 4.",
            "constraints": "Be brief.",
        })
        system = self.assembler.build_system_instruction(pack)
        assert system == (
            "You are a padel coach.\n"
            "\n"
            "Left side player.\n"
            "\n"
            "Recent matches:\n"
            "Won 3 of 4.\n"
            "\n"
            "Constraints:\n"
            "Be brief."
        )

    def test_braces_in_context_are_literal(self):
        pack = parse_context_pack({"coachPersona": "Use {name} placeholders"})
        system = self.assembler.build_system_instruction(pack)
        assert system.startswith("Use {name} placeholders")

    def test_user_message_appended_last(self):
        thread = parse_thread({"turns": [
            {"role": "user", "text": "first"},
            {"role": "assistant", "text": "second"},
        ]})
        payload = self.assembler.assemble("third", ContextPack(), thread)

        assert [t.text for t in payload.turns] == ["first", "second", "third"]
        assert [t.role for t in payload.turns] == [TurnRole.USER, TurnRole.MODEL, TurnRole.USER]

    def test_no_thread(self):
        payload = self.assembler.assemble("hi", ContextPack())
        assert len(payload.turns) == 1
        assert payload.turns[0].role == TurnRole.USER

    def test_history_capped_at_ten(self):
        thread = parse_thread(
            {"turns": [{"role": "user", "text": str(i)} for i in range(12)]},
            max_turns=50,
        )
        payload = self.assembler.assemble("new", ContextPack(), thread)
        texts = [t.text for t in payload.turns]
        assert texts == [str(i) for i in range(2, 12)] + ["new"]

    def test_request_body_shape(self):
        thread = parse_thread({"turns": [{"role": "model", "text": "Hello!"}]})
        payload = self.assembler.assemble("Help", ContextPack(constraints="Short"), thread)
        body = payload.to_request_body()

        assert body["systemInstruction"] == {"parts": [{"text": "Recent matches:\n\n\nConstraints:\nShort"}]}
        assert body["contents"] == [
            {"role": "model", "parts": [{"text": "Hello!"}]},
            {"role": "user", "parts": [{"text": "Help"}]},
        ]
        assert body["generationConfig"] == {
            "temperature": 0.7,
            "maxOutputTokens": 1200,
            "responseMimeType": "text/plain",
        }

    def test_generation_config_without_mime_type(self):
        assembler = PromptAssembler(generation=GenerationConfig(max_output_tokens=600, response_mime_type=None))
        body = assembler.assemble("hi", ContextPack()).to_request_body()
        assert body["generationConfig"] == {"temperature": 0.7, "maxOutputTokens": 600}

    def test_from_settings(self):
        settings = Settings(_env_file=None, temperature=0.2, max_output_tokens=300)
        assembler = PromptAssembler.from_settings(settings)
        config = assembler.assemble("hi", ContextPack()).to_request_body()["generationConfig"]
        assert config["temperature"] == 0.2
        assert config["maxOutputTokens"] == 300


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
