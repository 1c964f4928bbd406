# meu_financeiro/main.py
import asyncio
import logging

from flask import Flask, jsonify, request
from telegram import Update

from meu_financeiro.bot.bot_setup import setup_bot
from meu_financeiro.config import TELEGRAM_BOT_TOKEN, WEBHOOK_PATH, configure_logging
from meu_financeiro.core.db import get_supabase_client

configure_logging()
logger = logging.getLogger(__name__)

# --- Setup da aplicação no escopo global (executado uma vez ao carregar o módulo) ---
try:
    supabase_client = get_supabase_client()
    logger.info("Cliente Supabase inicializado")

    ptb_application = setup_bot({
        "TELEGRAM_BOT_TOKEN": TELEGRAM_BOT_TOKEN,
        "SUPABASE_CLIENT": supabase_client,
    })

    # A Application precisa de initialize() uma única vez antes de processar updates
    try:
        asyncio.run(ptb_application.initialize())
        logger.info("python-telegram-bot Application inicializada")
    except RuntimeError as e:
        if "cannot run an event loop while another loop is running" not in str(e):
            raise
        logger.warning("Event loop já em execução, pulando initialize() no startup")

    flask_app = Flask(__name__)

    @flask_app.route(WEBHOOK_PATH, methods=['POST'])
    async def telegram_webhook():
        if not request.is_json:
            logger.error("Webhook recebeu uma requisição que não é JSON")
            return jsonify({"status": "error", "message": "Request must be JSON"}), 400

        update_json = request.get_json()
        logger.debug("Webhook recebeu update: %s", list(update_json.keys()) if update_json else None)

        try:
            update = Update.de_json(update_json, ptb_application.bot)
            await ptb_application.process_update(update)
            return jsonify({"status": "ok"}), 200
        except Exception:
            logger.exception("Falha ao processar update do Telegram")
            return jsonify({"status": "error", "message": "Failed to process update"}), 500

    # Servido pelo Gunicorn: gunicorn meu_financeiro.main:wsgi_app
    wsgi_app = flask_app

except Exception:
    logger.exception("Erro crítico durante a inicialização em meu_financeiro/main.py")
    raise
