"""Console chatbot with optional Operand-backed long-term memory."""

import asyncio
import sys
from typing import Optional, TextIO

import httpx
from langchain_core.language_models import BaseLLM

from operand_demos.core.config import Settings, get_settings
from operand_demos.core.exceptions import IndexingError, OperandDemoError
from operand_demos.core.logging import setup_logger
from operand_demos.prompts.chatbot import GREETING_FROM_BOT, GREETING_FROM_USER
from operand_demos.schemas.indexing import CollectionIndexRequest
from operand_demos.services.chatbot import ChatbotService
from operand_demos.services.completion import CompletionService, create_completion_llm
from operand_demos.services.history import MessageHistory
from operand_demos.services.operand import OperandClient, OperandClientProtocol

logger = setup_logger(__name__)

MEMORY_COLLECTION_LABEL = "ltm"
QUIT_COMMAND = "quit"


async def create_memory_collection(
    operand_client: OperandClientProtocol, poll_interval: float
) -> str:
    """
    Create the collection that holds this run's messages.

    Returns:
        ID of the ready collection

    Raises:
        IndexingError: If the collection cannot be created or never becomes ready
    """
    collection = await operand_client.create_object(
        CollectionIndexRequest(label=MEMORY_COLLECTION_LABEL)
    )
    if collection is None:
        raise IndexingError("collection created without an id")
    collection = await operand_client.wait_for_object(
        collection, poll_interval=poll_interval
    )
    if not collection.is_ready:
        raise IndexingError(f"collection is not ready: {collection.indexing_status}")

    logger.info(f"Created long-term memory collection {collection.id}")
    return collection.id


async def chat_loop(
    chatbot: ChatbotService,
    history: MessageHistory,
    stdin: TextIO,
    stdout: TextIO,
) -> None:
    """Read lines until EOF or ``quit``, answering each one."""
    await history.log_from_user(GREETING_FROM_USER)
    await history.log_from_chatbot(GREETING_FROM_BOT)

    while True:
        stdout.write("You: ")
        stdout.flush()

        line = stdin.readline()
        if not line:
            break

        message = line.strip()
        if message == QUIT_COMMAND:
            break
        elif not message:
            continue

        response = await chatbot.generate_response(history, message)
        stdout.write(f"Bot: {response}\n")
        stdout.flush()

        await history.log_from_user(message)
        await history.log_from_chatbot(response)


async def run_chat(
    settings: Settings,
    stdin: TextIO = sys.stdin,
    stdout: TextIO = sys.stdout,
    llm: Optional[BaseLLM] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> None:
    """
    Run one chatbot session.

    Args:
        settings: Application settings
        stdin: Stream the user's lines are read from
        stdout: Stream the transcript is written to
        llm: Completion model; built from settings when omitted
        http_client: HTTP client for the indexing API; created (and closed)
            here when omitted

    Raises:
        OperandDemoError: On any indexing, search or completion failure
    """
    if llm is None:
        llm = create_completion_llm(settings)
    completion_service = CompletionService(llm)

    owns_http_client = http_client is None
    if http_client is None:
        http_client = httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)

    try:
        operand_client: Optional[OperandClient] = None
        collection_id: Optional[str] = None

        if settings.OPERAND_API_KEY:
            operand_client = OperandClient.from_settings(settings, http_client)
            collection_id = await create_memory_collection(
                operand_client, settings.OPERAND_POLL_INTERVAL_SECONDS
            )
        else:
            logger.warning("OPERAND_API_KEY not set, long-term memory disabled")

        try:
            chatbot = ChatbotService(
                completion_service=completion_service,
                operand_client=operand_client,
                collection_id=collection_id,
            )
            history = MessageHistory(
                operand_client=operand_client,
                collection_id=collection_id,
                poll_interval=settings.OPERAND_POLL_INTERVAL_SECONDS,
            )
            await chat_loop(chatbot, history, stdin, stdout)
        finally:
            if operand_client is not None and collection_id:
                try:
                    await operand_client.delete_object(collection_id)
                except OperandDemoError as e:
                    logger.error(f"error deleting collection: {e}")
    finally:
        if owns_http_client:
            await http_client.aclose()


def main() -> int:
    """Console entry point."""
    try:
        asyncio.run(run_chat(get_settings()))
    except OperandDemoError as e:
        print(f"error: {e.message}")
        return 1
    except Exception as e:
        logger.error(f"chatbot failed: {e}", exc_info=True)
        print(f"error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
