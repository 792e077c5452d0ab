"""Telegram bot webhook handler for the GUID helper.

This module is the bridge between Telegram and the conversion logic in
``guid_helper``.  It receives updates from Telegram (via webhooks), hands the
message text to the UpdateDispatcher and sends each reply back as a quote of
the original message.

Architecture overview:
  Telegram Cloud  ──webhook POST──►  Cloud Run (app/main.py)
                                        │
                                        ▼
                                  TelegramBotHandler.handle_webhook()
                                        │
                                        ▼
                                  Application.process_update()
                                        │
                                        ▼
                                  handle_message()
                                        │
                                        ▼
                                  UpdateDispatcher.dispatch()
                                  (/start, base64, GUID, legacy id)
                                        │
                                        ▼
                                  message.reply_text() per reply

Key design decisions:
  - Every update is handled independently; nothing is kept between updates.
  - Text that is not recognised gets no reply at all, so the bot stays quiet
    in group chats.
  - Failures while replying are not retried.  The error handler logs them and
    the update is dropped.
"""
import logging

from telegram import Update
from telegram.ext import (
    Application,
    ContextTypes,
    MessageHandler,
    filters,
)

from guid_helper.dispatcher import UpdateDispatcher
from app.metrics import UPDATE_TOTAL, REPLY_TOTAL, ERROR_TOTAL

logger = logging.getLogger(__name__)


class TelegramBotHandler:
    """Handler for Telegram bot webhook integration."""

    def __init__(self, bot_token: str, dispatcher: UpdateDispatcher | None = None):
        """Initialize Telegram bot handler.

        Note: This only stores references.  The Telegram Application is
        created later in initialize() because it requires async setup.

        Args:
            bot_token: Telegram bot token (from @BotFather).
            dispatcher: Conversion dispatcher; defaults to one with all
                replies enabled.
        """
        self.bot_token = bot_token
        self.dispatcher = dispatcher or UpdateDispatcher()
        self.app = None  # python-telegram-bot Application (created in initialize)

    async def initialize(self):
        """Initialize the Telegram application and register handlers.

        Called once at startup (from app/main.py).
        """
        self.app = Application.builder().token(self.bot_token).build()

        # Plain new text messages only; edited messages and other update
        # types are ignored.
        self.app.add_handler(
            MessageHandler(filters.UpdateType.MESSAGE & filters.TEXT, self.handle_message)
        )
        self.app.add_error_handler(self.handle_error)

        # Finalize the Application (opens the HTTP connection to Telegram).
        await self.app.initialize()

    async def shutdown(self):
        """Shutdown Telegram application and release resources."""
        if self.app:
            await self.app.shutdown()

    # ------------------------------------------------------------------
    # Update handlers
    # ------------------------------------------------------------------

    async def handle_message(
        self, update: Update, _context: ContextTypes.DEFAULT_TYPE
    ):
        """Convert the message text and reply with the results.

        Send failures propagate to the application's error handler.
        """
        message = update.message
        if not message or not message.text:
            logger.debug("Ignoring update without text message")
            return

        async def send(reply: str):
            await message.reply_text(reply, do_quote=True)
            REPLY_TOTAL.inc()

        kind, sent = await self.dispatcher.dispatch(message.text, send)
        UPDATE_TOTAL.labels(kind=kind).inc()
        if sent:
            logger.info(
                f"Replied to message {message.message_id} in chat {message.chat_id} "
                f"({kind}, {sent} replies)"
            )

    async def handle_error(
        self, update: object, context: ContextTypes.DEFAULT_TYPE
    ):
        """Log a failure raised while handling an update.  No retry."""
        ERROR_TOTAL.labels(stage="handler").inc()
        update_id = update.update_id if isinstance(update, Update) else None
        logger.error(
            f"Error handling update {update_id}: {context.error}",
            exc_info=context.error,
        )

    # ------------------------------------------------------------------
    # Webhook entry point (called by app/main.py's FastAPI route)
    # ------------------------------------------------------------------

    async def handle_webhook(self, update_data: dict):
        """Handle an incoming webhook POST from Telegram.

        The python-telegram-bot library deserializes the raw dict into an
        Update object and dispatches it to handle_message.

        Args:
            update_data: Raw JSON dict from Telegram's webhook POST body.

        Raises:
            Exception: If the payload cannot be deserialized.
        """
        try:
            update = Update.de_json(update_data, self.app.bot)
        except Exception as e:
            logger.error(f"Malformed webhook update: {e}")
            raise
        if update is None:
            raise ValueError("Empty webhook update")
        logger.info(f"New update received: {update.update_id}")
        await self.app.process_update(update)
