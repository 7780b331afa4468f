# src/interfaces/api/main.py
"""FastAPI application hosting the bots plus a small operator API.

The lifespan builds the services, starts both bots and stops them on
shutdown, so one process serves HTTP and chat at the same time.

Run with: uvicorn src.interfaces.api.main:app
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

# Load environment variables from .env file
load_dotenv()

from src.bootstrap import Services, build_services  # noqa: E402
from src.config import get_settings  # noqa: E402
from src.interfaces.api.schemas import (  # noqa: E402
    ChatRequest,
    ChatResponse,
    HealthResponse,
    SendRequest,
    SendResponse,
)
from src.interfaces.api.security import (  # noqa: E402
    get_rate_limit_string,
    limiter,
    verify_api_key,
)
from src.utils.observability import setup_logfire  # noqa: E402

logger = logging.getLogger(__name__)

ApiKey = Annotated[str, Depends(verify_api_key)]


def get_services(request: Request) -> Services:
    return request.app.state.services


ServicesDep = Annotated[Services, Depends(get_services)]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()
    setup_logfire(settings.logfire_token)

    services = build_services(settings)
    app.state.services = services
    await services.lifecycle.startup()

    yield

    await services.lifecycle.shutdown()
    logger.info("Shutting down...")


app = FastAPI(
    title="Stream Companion API",
    description="Operator API for the chat and Telegram bots",
    version="1.0.0",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.get("/health", response_model=HealthResponse)
@limiter.limit(get_rate_limit_string)
async def health_check(request: Request, services: ServicesDep) -> HealthResponse:
    """Health check endpoint with provider and bot status."""
    return HealthResponse(
        status="healthy",
        providers=services.ai.providers,
        telegram_running=services.telegram.is_running,
        slack_running=services.slack.is_running,
    )


@app.post("/telegram/send", response_model=SendResponse)
@limiter.limit(get_rate_limit_string)
async def telegram_send(
    request: Request, body: SendRequest, services: ServicesDep, _api_key: ApiKey
) -> SendResponse:
    """Send a Telegram message through the access gate.

    Chats outside the allow-list are refused with sent=false.
    """
    sent = await services.telegram.send_message(body.chat_id, body.text)
    return SendResponse(sent=sent)


@app.post("/ai/chat", response_model=ChatResponse)
@limiter.limit(get_rate_limit_string)
async def ai_chat(
    request: Request, body: ChatRequest, services: ServicesDep, _api_key: ApiKey
) -> ChatResponse:
    """Run one completion against the chosen provider."""
    content = await services.ai.complete(
        body.system_prompt,
        body.message,
        provider=body.provider,
        model_override=body.model,
    )
    return ChatResponse(provider=body.provider, content=content)
