"""
Telegram Bot — weather lookups from chat.

Each chat gets its own orchestrator (its own query, unit and last
result), kept for the MAX_WIDGETS most recent chats. Also serves
the web widget in a background thread.

Usage:
  python bot.py

Without TELEGRAM_BOT_TOKEN only the web widget is started.
"""

import logging
import threading

from telegram import Update
from telegram.ext import (
    ApplicationBuilder,
    CommandHandler,
    MessageHandler,
    filters,
    ContextTypes,
)

from config import TELEGRAM_BOT_TOKEN, OWNER_CHAT_ID, LOG_LEVEL
from abilities.geolocation import FixedPosition
from errors import WeatherError
from orchestrator import Orchestrator, Widgets

logging.basicConfig(
    format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
    level=LOG_LEVEL,
)
log = logging.getLogger("bot")

_widgets = Widgets()


def widget_for(chat_id: int) -> Orchestrator:
    return _widgets.get(chat_id)


# ── Auth ────────────────────────────────────────────────────────

def owner_only(func):
    """Restrict to OWNER_CHAT_ID. Set to 0 in .env to allow everyone."""
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE):
        if OWNER_CHAT_ID and update.effective_chat.id != OWNER_CHAT_ID:
            await update.message.reply_text("Not authorized.")
            return
        return await func(update, context)
    return wrapper


async def _reply_lookup(update: Update, coro):
    """Run a lookup and reply with whatever the widget now shows."""
    widget = widget_for(update.effective_chat.id)
    try:
        await coro
    except WeatherError:
        pass  # message is in widget state
    await update.message.reply_text(widget.get_status_text())


# ── Command handlers ────────────────────────────────────────────

@owner_only
async def cmd_start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await update.message.reply_text(
        "Weather bot online. Commands:\n\n"
        "/weather <city>  — current weather for a city\n"
        "/unit  — switch between °C and °F\n"
        "/help  — show this message\n\n"
        "Or send a city name, or share your location."
    )


@owner_only
async def cmd_help(update: Update, context: ContextTypes.DEFAULT_TYPE):
    await cmd_start(update, context)


@owner_only
async def cmd_weather(update: Update, context: ContextTypes.DEFAULT_TYPE):
    if not context.args:
        await update.message.reply_text("Usage: /weather <city>")
        return
    city = " ".join(context.args)
    widget = widget_for(update.effective_chat.id)
    await _reply_lookup(update, widget.lookup(city))


@owner_only
async def cmd_unit(update: Update, context: ContextTypes.DEFAULT_TYPE):
    widget = widget_for(update.effective_chat.id)
    unit = widget.toggle_unit()
    text = f"Units: °{unit}"
    if widget.view()["display"]:
        text += "\n\n" + widget.get_status_text()
    await update.message.reply_text(text)


@owner_only
async def handle_location(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """A shared Telegram location is the device position."""
    loc = update.message.location
    widget = widget_for(update.effective_chat.id)
    await _reply_lookup(
        update,
        widget.resolve_by_device_location(FixedPosition(loc.latitude, loc.longitude)),
    )


@owner_only
async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Treat plain text as a city name."""
    text = update.message.text
    if not text:
        return
    widget = widget_for(update.effective_chat.id)
    await _reply_lookup(update, widget.lookup(text))


# ── Main ────────────────────────────────────────────────────────

def run_widget():
    from dashboard import create_app
    from config import WIDGET_HOST, WIDGET_PORT
    app = create_app()
    # Suppress Flask request logs in the main console
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    log.info(f"Weather widget: http://{WIDGET_HOST}:{WIDGET_PORT}")
    app.run(host=WIDGET_HOST, port=WIDGET_PORT, use_reloader=False)


def start_widget_in_thread():
    """Run the Flask widget in a background thread."""
    try:
        run_widget()
    except Exception as e:
        log.error(f"Weather widget failed to start: {e}")


def build_application():
    app = ApplicationBuilder().token(TELEGRAM_BOT_TOKEN).build()
    app.add_handler(CommandHandler("start", cmd_start))
    app.add_handler(CommandHandler("help", cmd_help))
    app.add_handler(CommandHandler("weather", cmd_weather))
    app.add_handler(CommandHandler("unit", cmd_unit))
    app.add_handler(MessageHandler(filters.LOCATION, handle_location))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message))
    return app


def main():
    if not TELEGRAM_BOT_TOKEN:
        log.info("TELEGRAM_BOT_TOKEN not set, running the web widget only")
        run_widget()
        return

    widget_thread = threading.Thread(target=start_widget_in_thread, daemon=True)
    widget_thread.start()

    app = build_application()
    log.info("Bot starting (Telegram polling)...")
    app.run_polling()


if __name__ == "__main__":
    main()
