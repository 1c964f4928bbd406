# meu_financeiro/config.py
import logging
import os
from dotenv import load_dotenv

load_dotenv()

# Configurações do Telegram
TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")
WEBHOOK_PATH = os.getenv("WEBHOOK_PATH", "/webhook")

# Configurações do Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Regras do orçamento
DEFAULT_BEST_BUY_DAY = 7
DEFAULT_RESERVE_PERCENTAGE = 10.0
MAX_AMOUNT = 1_000_000_000
MAX_NAME_LENGTH = 200
MAX_INSTALLMENTS = 12
DATE_WINDOW_YEARS = 10
HISTORY_MONTHS = int(os.getenv("HISTORY_MONTHS", "6"))

# Cartão usado quando o usuário ainda não cadastrou nenhum
DEFAULT_CREDIT_CARD = {
    "name": "Cartão Principal",
    "limit": 5000.0,
    "closing_day": 15,
    "due_day": 25,
    "best_buy_day": DEFAULT_BEST_BUY_DAY,
}


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configura o logging da aplicação (chamado uma vez no startup)."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # httpx (usado pelo supabase e pelo telegram) é muito verboso em INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
