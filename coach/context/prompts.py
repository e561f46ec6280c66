"""
System Prompts

Contains the system-instruction template and the fixed texts of the coach.
"""

from .schema import ContextPack


class SystemPrompts:
    """
    Prompt texts for the padel coach.

    The template always has the same four sections, in the same order.
    Empty context fields leave their section blank rather than removing it.
    """

    SYSTEM_TEMPLATE = """
{coach_persona}

{player_profile}

Recent matches:
{recent_matches_summary}

Constraints:
{constraints}
"""

    # Returned whenever the model produced no usable text
    FALLBACK_REPLY = "I'm here. Tell me what you want to improve today."

    USAGE_TIP = "Add ?debug=1 to POST /coach/chat to see model, finish reason and token usage."

    def get_system_instruction(self, context_pack: ContextPack) -> str:
        """Render the context pack into the system instruction"""
        return self.SYSTEM_TEMPLATE.format(
            coach_persona=context_pack.coach_persona,
            player_profile=context_pack.player_profile,
            recent_matches_summary=context_pack.recent_matches_summary,
            constraints=context_pack.constraints,
        ).strip()
