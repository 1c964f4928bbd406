# meu_financeiro/bot/bot_setup.py
import logging

from telegram.ext import Application, CommandHandler

from meu_financeiro.bot.commands import ALL_COMMANDS

logger = logging.getLogger(__name__)


def setup_bot(config: dict) -> Application:
    """
    Configura a aplicação do bot do Telegram (comandos do orçamento).
    Retorna o objeto Application configurado, pronto para ser usado por um servidor WSGI.
    """
    application = Application.builder().token(config["TELEGRAM_BOT_TOKEN"]).build()

    # Armazena o cliente Supabase no bot_data para que os comandos possam acessá-lo
    application.bot_data['supabase_client'] = config["SUPABASE_CLIENT"]

    for name, callback in ALL_COMMANDS.items():
        application.add_handler(CommandHandler(name, callback))

    logger.info("Bot configurado com %d comandos para webhooks", len(ALL_COMMANDS))
    # A aplicação é rodada pelo servidor WSGI, sem run_polling()
    return application
