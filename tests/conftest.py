import os

# app.main refuses to start without a bot token in production.
os.environ["APP_ENV"] = "test"
os.environ.pop("TELEGRAM_BOT_TOKEN", None)
