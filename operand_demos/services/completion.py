"""Text completion service backed by an OpenAI completion model."""

from typing import List, Optional

from langchain_core.language_models import BaseLLM
from langchain_openai import OpenAI

from operand_demos.core.config import Settings
from operand_demos.core.exceptions import CompletionError
from operand_demos.core.logging import setup_logger

logger = setup_logger(__name__)

# Sampling parameters used for every chatbot reply
TEMPERATURE = 0.7
MAX_TOKENS = 64
TOP_P = 1.0
FREQUENCY_PENALTY = 0.0
PRESENCE_PENALTY = 0.6


def create_completion_llm(settings: Settings) -> BaseLLM:
    """Create the OpenAI completion model with the chatbot's fixed sampling."""
    if not settings.OPENAI_KEY:
        raise CompletionError("OPENAI_KEY not set")

    logger.info(
        f"Initializing OpenAI completion model: model={settings.OPENAI_MODEL}, "
        f"max_tokens={MAX_TOKENS}, temperature={TEMPERATURE}"
    )

    return OpenAI(
        api_key=settings.OPENAI_KEY,
        model=settings.OPENAI_MODEL,
        temperature=TEMPERATURE,
        max_tokens=MAX_TOKENS,
        top_p=TOP_P,
        frequency_penalty=FREQUENCY_PENALTY,
        presence_penalty=PRESENCE_PENALTY,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        max_retries=0,
    )


class CompletionService:
    """Service for single-shot text completion."""

    def __init__(self, llm: BaseLLM) -> None:
        self._llm = llm

    async def complete(self, prompt: str, stop: Optional[List[str]] = None) -> str:
        """
        Complete a prompt and return the first choice, trimmed.

        Raises:
            CompletionError: If the provider call fails or returns no choices
        """
        try:
            result = await self._llm.agenerate([prompt], stop=stop)
        except Exception as e:
            logger.error(f"Completion request failed: {e}", exc_info=True)
            raise CompletionError(f"Completion request failed: {e}") from e

        if not result.generations or not result.generations[0]:
            raise CompletionError("openai returned zero choices")

        return result.generations[0][0].text.strip()
