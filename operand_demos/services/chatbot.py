"""Chatbot service: prompt building with short- and long-term context."""

from typing import List, Optional

from operand_demos.core.logging import setup_logger
from operand_demos.prompts.chatbot import STOP_SEQUENCES, build_chat_prompt
from operand_demos.schemas.chatbot import MessageDirection
from operand_demos.services.completion import CompletionService
from operand_demos.services.history import MessageHistory
from operand_demos.services.operand import OperandClientProtocol

logger = setup_logger(__name__)

# Number of recent turns included verbatim in every prompt
RECENT_TURNS = 5
# Number of long-term search results included in every prompt
LONG_TERM_RESULTS = 5


class ChatbotService:
    """Service to generate chatbot replies from a message and its history."""

    def __init__(
        self,
        completion_service: CompletionService,
        operand_client: Optional[OperandClientProtocol] = None,
        collection_id: Optional[str] = None,
    ) -> None:
        """
        Initialize the chatbot service.

        Args:
            completion_service: Service used to complete prompts
            operand_client: Client used for long-term memory search (optional)
            collection_id: Collection holding this run's indexed messages
        """
        self._completion = completion_service
        self._operand = operand_client
        self.collection_id = collection_id

    async def retrieve_long_term_context(self, message: str) -> List[str]:
        """
        Search the user's previous messages for ones relevant to ``message``.

        Returns:
            Message texts, most relevant first; empty when long-term memory
            is disabled

        Raises:
            SearchError: If the search request fails
        """
        if self._operand is None or not self.collection_id:
            return []

        response = await self._operand.search_contents(
            query=message,
            parent_ids=[self.collection_id],
            max_results=LONG_TERM_RESULTS,
            filter={"direction": MessageDirection.INBOUND.value},
        )
        logger.debug(f"Long-term search returned {len(response.contents)} results")
        return [content.content for content in response.contents]

    async def build_prompt(self, history: MessageHistory, message: str) -> str:
        """Assemble the full prompt for ``message`` given the conversation so far."""
        long_term = await self.retrieve_long_term_context(message)
        recent_turns = history.last_n(RECENT_TURNS)

        # Recent turns are already quoted verbatim
        recent_texts = {turn.text for turn in recent_turns}
        long_term = [text for text in long_term if text not in recent_texts]

        return build_chat_prompt(
            message=message,
            recent_turns=recent_turns,
            long_term=long_term,
        )

    async def generate_response(self, history: MessageHistory, message: str) -> str:
        """
        Generate a reply to ``message``.

        Raises:
            SearchError: If long-term context retrieval fails
            CompletionError: If the completion fails or returns no choices
        """
        prompt = await self.build_prompt(history, message)
        return await self._completion.complete(prompt, stop=STOP_SEQUENCES)
