# meu_financeiro/bot/commands/utils.py
import functools
import logging
import re
from typing import List, Optional, Tuple

from telegram import Update
from telegram.ext import ContextTypes

from meu_financeiro.core.cycle import parse_month
from meu_financeiro.core.errors import FinanceError
from meu_financeiro.core.ledger import FinanceLedger
from meu_financeiro.core.models import Transaction
from meu_financeiro.utils.labels import PAYMENT_TYPE_LABELS, category_label
from meu_financeiro.utils.text_utils import format_currency, format_date_br

logger = logging.getLogger(__name__)

_INSTALLMENTS_RE = re.compile(r"^(\d{1,2})x$", re.IGNORECASE)


def finance_command(func):
    """Responde erros do orçamento com a mensagem e loga os inesperados."""
    @functools.wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        logger.debug(
            "Comando %s de %s: %s", func.__name__, update.effective_user.id, context.args
        )
        try:
            await func(update, context)
        except (FinanceError, ValueError) as e:
            await update.message.reply_text(f"❌ {e}")
        except Exception:
            logger.exception("Erro inesperado no comando %s", func.__name__)
            await update.message.reply_text(
                "❌ Ocorreu um erro ao processar seu comando. Tente novamente mais tarde."
            )
    return wrapper


def get_ledger(update: Update, context: ContextTypes.DEFAULT_TYPE) -> FinanceLedger:
    """Carrega o orçamento do usuário que enviou a mensagem."""
    supabase_client = context.bot_data["supabase_client"]
    return FinanceLedger(supabase_client, user_id=str(update.effective_user.id)).load()


def month_arg(args: Optional[List[str]]) -> Optional[str]:
    """Lê um 'AAAA-MM' opcional do primeiro argumento do comando."""
    if not args:
        return None
    parse_month(args[0])
    return args[0]


def split_installments(args: List[str]) -> Tuple[Optional[int], List[str]]:
    """Separa um '3x' opcional do início dos argumentos."""
    if args:
        match = _INSTALLMENTS_RE.match(args[0])
        if match:
            return int(match.group(1)), args[1:]
    return None, args


def format_transaction_line(t: Transaction) -> str:
    sign = "+" if t.type == "income" else "-"
    line = f"{format_date_br(t.date)} {category_label(t.category)} {t.name}: {sign}{format_currency(t.amount)}"
    if t.type == "expense" and t.payment_type:
        line += f" ({PAYMENT_TYPE_LABELS[t.payment_type.value]})"
    return f"{line}\n   id: {t.id}"


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Envia uma mensagem quando o comando /start é emitido."""
    await update.message.reply_text(
        "Olá! Sou o Meu Financeiro, seu assistente de orçamento.\n\n"
        "Registre suas saídas com /gasto e suas entradas com /ganho. "
        "Use /resumo para ver como está o mês e /help para a lista completa de comandos."
    )


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Envia uma mensagem quando o comando /help é emitido."""
    await update.message.reply_text(
        "Como usar:\n\n"
        "Lançamentos:\n"
        "- /gasto <valor> <categoria> <pagamento> [Nx] <nome> (ex: /gasto 300 lazer credito 3x Tênis)\n"
        "- /ganho <valor> <categoria> <nome> (ex: /ganho 5000 salario Salário julho)\n"
        "- /lancamentos [AAAA-MM]: lista os lançamentos do mês com os ids\n"
        "- /remover <id>: remove um lançamento (parcelas removem a compra inteira)\n\n"
        "Resumo:\n"
        "- /resumo [AAAA-MM]: entradas, saídas, reserva e limite disponível\n"
        "- /fatura [AAAA-MM]: compras que compõem a fatura do cartão\n"
        "- /cofre e /vales: saldos do cofre e dos tickets\n"
        "- /balanco [meses] e /gastos_por_categoria [AAAA-MM]: gráficos\n\n"
        "Cofre e cartão:\n"
        "- /guardar <valor>: guarda dinheiro no cofre\n"
        "- /resgatar <valor> <renda|uso> <motivo>: retira do cofre\n"
        "- /pagar_fatura <valor> [salario|cofre]\n"
        "- /cartao [campo valor]: mostra ou altera o cartão (limite, fechamento, vencimento, melhor_dia, nome)\n"
        "- /reserva <percentual>: percentual do salário guardado para emergências\n\n"
        "Contas fixas:\n"
        "- /contas: situação das contas fixas do mês\n"
        "- /nova_conta <valor> [variavel] <nome>\n"
        "- /pagar_conta <nome> [valor]\n\n"
        "Categorias de saída: contas, alimentacao, transporte, saude, lazer.\n"
        "Categorias de entrada: salario, extras, va, vt.\n"
        "Pagamento: debito, credito, va, vt."
    )
