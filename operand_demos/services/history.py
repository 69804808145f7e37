"""In-process conversation history with optional long-term memory indexing."""

from typing import List, Optional

from operand_demos.core.exceptions import IndexingError
from operand_demos.core.logging import setup_logger
from operand_demos.schemas.chatbot import ConversationTurn, MessageDirection
from operand_demos.schemas.indexing import TextIndexRequest, TextMetadata
from operand_demos.services.operand import OperandClientProtocol

logger = setup_logger(__name__)


class MessageHistory:
    """Ordered history of messages sent and received during one chatbot run."""

    def __init__(
        self,
        operand_client: Optional[OperandClientProtocol] = None,
        collection_id: Optional[str] = None,
        poll_interval: float = 0.5,
    ) -> None:
        """
        Initialize the history.

        Args:
            operand_client: Client used to index messages for long-term memory
            collection_id: Collection holding this run's messages
            poll_interval: Seconds between indexing status checks
        """
        self.turns: List[ConversationTurn] = []
        self._operand = operand_client
        self.collection_id = collection_id
        self._poll_interval = poll_interval

    @property
    def long_term_enabled(self) -> bool:
        return self._operand is not None and bool(self.collection_id)

    def __len__(self) -> int:
        return len(self.turns)

    async def _index_turn(self, turn: ConversationTurn) -> None:
        # No-op without long-term memory; empty objects cannot be indexed.
        if not self.long_term_enabled or not turn.text:
            return

        obj = await self._operand.create_object(
            TextIndexRequest(
                metadata=TextMetadata(text=turn.text),
                # Lets searches be scoped to messages from one side of the conversation
                properties={"direction": turn.direction.value},
                parent_id=self.collection_id,
            )
        )
        if obj is None:
            raise IndexingError("created object has no id")
        obj = await self._operand.wait_for_object(obj, poll_interval=self._poll_interval)
        if not obj.is_ready:
            raise IndexingError(
                "object not indexed",
                details={"object_id": obj.id, "status": obj.indexing_status},
            )
        logger.debug(f"Indexed {turn.direction.value} message as object {obj.id}")

    async def _log(self, direction: MessageDirection, text: str) -> ConversationTurn:
        turn = ConversationTurn(direction=direction, text=text)
        await self._index_turn(turn)
        self.turns.append(turn)
        return turn

    async def log_from_user(self, text: str) -> ConversationTurn:
        """Record a message typed by the user."""
        return await self._log(MessageDirection.INBOUND, text)

    async def log_from_chatbot(self, text: str) -> ConversationTurn:
        """Record a reply produced by the chatbot."""
        return await self._log(MessageDirection.OUTBOUND, text)

    def last_n(self, n: int) -> List[ConversationTurn]:
        """Return up to the last ``n`` turns, oldest first."""
        if len(self.turns) < n:
            return list(self.turns)
        return self.turns[len(self.turns) - n :]
