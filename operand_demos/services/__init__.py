"""Business logic services."""

from .operand import OperandClient
from .storage import S3StorageService, create_storage_service
from .ingestion import IngestionService
from .completion import CompletionService, create_completion_llm
from .history import MessageHistory
from .chatbot import ChatbotService
