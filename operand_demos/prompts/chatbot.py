"""Prompts for the console chatbot."""

from typing import Iterable, List

from operand_demos.schemas.chatbot import ConversationTurn

# Persona preamble that starts every prompt
CHATBOT_PREAMBLE = (
    "The following is a conversation with an AI assistant. "
    "The assistant is helpful, creative, clever, and very friendly.\n\n"
)

# Long-term memory section, one bullet per retrieved message
LONG_TERM_HEADER = "Relevant previous messages from Human:\n"

CONVERSATION_HEADER = "The conversation goes as follows:\n"

# Stop sequences so the model answers a single turn
STOP_SEQUENCES: List[str] = ["Human: ", "AI: "]

# Conversation seed, taken from OpenAI's example chatbot prompt
GREETING_FROM_USER = "Hello, who are you?"
GREETING_FROM_BOT = "I am an AI created by OpenAI. How can I help you today?"


def build_long_term_section(contents: Iterable[str]) -> str:
    """Render retrieved messages as a bullet list, or nothing if there are none."""
    bullets = "".join(f"- {content}\n" for content in contents)
    if not bullets:
        return ""
    return LONG_TERM_HEADER + bullets + "\n"


def build_chat_prompt(
    message: str,
    recent_turns: Iterable[ConversationTurn],
    long_term: Iterable[str] = (),
) -> str:
    """
    Build the completion prompt for a new user message.

    Args:
        message: The new line typed by the user
        recent_turns: Recent conversation turns, oldest first
        long_term: Retrieved previous user messages, most relevant first

    Returns:
        Prompt ending in an ``AI:`` cue with no trailing space
    """
    parts = [CHATBOT_PREAMBLE, build_long_term_section(long_term), CONVERSATION_HEADER]
    parts.extend(f"{turn.speaker}: {turn.text}\n" for turn in recent_turns)
    parts.append(f"Human: {message}\nAI:")
    return "".join(parts)
