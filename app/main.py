"""FastAPI entry point for Cloud Run deployment."""
import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from app.logging_config import setup_logging
from app.metrics import ERROR_TOTAL
from app.telegram_handler import TelegramBotHandler
from guid_helper.constants import DEFAULT_QUERY_FIELD
from guid_helper.dispatcher import UpdateDispatcher

setup_logging()
logger = logging.getLogger(__name__)

TELEGRAM_BOT_TOKEN = os.environ.get("TELEGRAM_BOT_TOKEN", "")
APP_ENV = os.environ.get("APP_ENV", "production").lower()
REPLY_QUERY_TEMPLATES = os.environ.get("REPLY_QUERY_TEMPLATES", "true").lower() in ("1", "true", "yes")
QUERY_FIELD_NAME = os.environ.get("QUERY_FIELD_NAME", DEFAULT_QUERY_FIELD)
# Every update arrives from Telegram's servers, so this is one cap shared by all chats.
WEBHOOK_RATE_LIMIT = os.environ.get("WEBHOOK_RATE_LIMIT", "600/minute")
telegram_handler = None

# Validate required environment variables early.
_required_env = ["TELEGRAM_BOT_TOKEN"]
_missing_env = [key for key in _required_env if not os.environ.get(key)]
if _missing_env:
    logger.error(f"Missing required environment variables: {_missing_env}")
    if APP_ENV == "production":
        raise RuntimeError("Missing required environment variables")

if TELEGRAM_BOT_TOKEN:
    logger.info(f"TELEGRAM_BOT_TOKEN found, length: {len(TELEGRAM_BOT_TOKEN)}")
else:
    logger.warning("TELEGRAM_BOT_TOKEN not set - Telegram integration disabled")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup logic
    await init_telegram()
    yield
    # Shutdown logic
    if telegram_handler:
        await telegram_handler.shutdown()

app = FastAPI(lifespan=lifespan)

# Rate limiting configuration
limiter = Limiter(key_func=get_remote_address)
app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Handle rate limit exceeded errors.

    Returns JSONResponse instead of raising exception.
    """
    logger.warning(f"Rate limit exceeded for {request.client.host}")
    return JSONResponse(
        status_code=429,
        content={
            "error": "Rate limit exceeded",
            "detail": "Too many requests. Please try again later.",
        }
    )


async def init_telegram():
    """Initialize Telegram bot."""
    global telegram_handler
    if TELEGRAM_BOT_TOKEN and telegram_handler is None:
        try:
            logger.info("Initializing Telegram bot...")
            handler = TelegramBotHandler(
                bot_token=TELEGRAM_BOT_TOKEN,
                dispatcher=UpdateDispatcher(
                    include_query_templates=REPLY_QUERY_TEMPLATES,
                    query_field=QUERY_FIELD_NAME,
                ),
            )
            await handler.initialize()
            telegram_handler = handler
            logger.info("Telegram bot initialized successfully")
        except Exception:
            logger.exception("Failed to initialize Telegram bot")


@app.post("/webhook/telegram")
@limiter.limit(lambda: WEBHOOK_RATE_LIMIT)
async def telegram_webhook(request: Request):
    """Webhook endpoint for Telegram bot updates.

    Endpoint: POST /webhook/telegram

    Updates that cannot be processed are logged and acknowledged with
    ``{"ok": false}`` so Telegram does not redeliver them.
    """
    # Lazy initialization on first webhook call
    if telegram_handler is None and TELEGRAM_BOT_TOKEN:
        await init_telegram()

    if not telegram_handler:
        raise HTTPException(
            status_code=503, detail="Telegram bot not configured"
        )

    try:
        update_data = await request.json()
        await telegram_handler.handle_webhook(update_data)
        return {"ok": True}
    except Exception as e:
        ERROR_TOTAL.labels(stage="webhook").inc()
        logger.error(f"Unable to process an update: {e}")
        return {"ok": False}


@app.get("/telegram/webhook-status")
async def telegram_webhook_status():
    """Get Telegram webhook status."""
    # Lazy initialization on status check
    if telegram_handler is None and TELEGRAM_BOT_TOKEN:
        await init_telegram()

    if not telegram_handler or not telegram_handler.app:
        return {
            "status": "disabled",
            "message": "Telegram bot not configured",
            "token_present": bool(TELEGRAM_BOT_TOKEN),
        }

    try:
        bot_info = await telegram_handler.app.bot.get_me()
        return {
            "status": "active",
            "bot_username": bot_info.username,
            "bot_name": bot_info.first_name,
        }
    except Exception as e:
        logger.error(f"Error getting bot info: {e}")
        return {"status": "error", "message": str(e)}


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.get("/healthz")
async def healthz():
    """Basic health check for Cloud Run."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", 8080)))
