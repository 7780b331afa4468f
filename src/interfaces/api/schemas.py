# src/interfaces/api/schemas.py
"""Pydantic models for FastAPI request/response validation."""

from pydantic import BaseModel, Field

from src.core.ai import AiProvider


class SendRequest(BaseModel):
    """Request body for POST /telegram/send.

    Attributes:
        chat_id: Target Telegram chat ID (must be on the allow-list).
        text: Message text.
    """

    chat_id: int = Field(..., description="Target Telegram chat ID")
    text: str = Field(..., min_length=1, description="Message text")


class SendResponse(BaseModel):
    """Response body for POST /telegram/send."""

    sent: bool = Field(..., description="Whether Telegram accepted the message")


class ChatRequest(BaseModel):
    """Request body for POST /ai/chat.

    Attributes:
        system_prompt: System message content.
        message: User message content.
        provider: Provider to use.
        model: Optional model override.
    """

    system_prompt: str = Field(..., description="System message content")
    message: str = Field(..., min_length=1, description="User message content")
    provider: AiProvider = Field(AiProvider.OLLAMA, description="AI provider")
    model: str | None = Field(None, description="Model override")


class ChatResponse(BaseModel):
    """Response body for POST /ai/chat.

    content is null when the provider request failed or returned nothing.
    """

    provider: AiProvider
    content: str | None = None


class HealthResponse(BaseModel):
    status: str
    providers: list[AiProvider]
    telegram_running: bool
    slack_running: bool
