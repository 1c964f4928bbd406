# meu_financeiro/bot/commands/vault.py
from telegram import Update
from telegram.ext import ContextTypes

from meu_financeiro.bot.commands.utils import finance_command, get_ledger
from meu_financeiro.core.aggregation import vault_balance
from meu_financeiro.utils.labels import DESTINATION_LABELS, parse_destination_type
from meu_financeiro.utils.text_utils import format_currency, normalize_text, parse_amount

INVOICE_SOURCES = {"salario": "salary", "salary": "salary", "cofre": "vault", "vault": "vault"}


@finance_command
async def guardar_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Guarda um valor no cofre."""
    if not context.args:
        await update.message.reply_text("Uso: /guardar <valor>\nEx: /guardar 300")
        return

    ledger = get_ledger(update, context)
    deposit = ledger.transfer_to_vault(parse_amount(context.args[0]))
    await update.message.reply_text(
        f"🏦 {format_currency(deposit.amount)} guardados no cofre. "
        f"Saldo: {format_currency(vault_balance(ledger.transactions))}"
    )


@finance_command
async def resgatar_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Retira um valor do cofre para a renda do mês ou para uso direto."""
    args = context.args or []
    usage = (
        "Uso: /resgatar <valor> <renda|uso> <motivo>\n"
        "Ex: /resgatar 500 renda Mês apertado\n"
        "Ex: /resgatar 800 uso Conserto do carro"
    )
    if len(args) < 3:
        await update.message.reply_text(usage)
        return

    amount = parse_amount(args[0])
    destination = parse_destination_type(args[1])
    if destination is None:
        await update.message.reply_text(f"❌ Destino '{args[1]}' não reconhecido.\n\n{usage}")
        return

    ledger = get_ledger(update, context)
    withdrawal = ledger.withdraw_from_vault(amount, " ".join(args[2:]), destination)
    await update.message.reply_text(
        f"🔓 {format_currency(withdrawal.amount)} retirados do cofre "
        f"({DESTINATION_LABELS[destination.value]}). "
        f"Saldo: {format_currency(vault_balance(ledger.transactions))}"
    )


@finance_command
async def pagar_fatura_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Registra o pagamento da fatura com o salário (padrão) ou com o cofre."""
    args = context.args or []
    if not args:
        await update.message.reply_text(
            "Uso: /pagar_fatura <valor> [salario|cofre]\nEx: /pagar_fatura 1250,40 cofre"
        )
        return

    source = INVOICE_SOURCES.get(normalize_text(args[1])) if len(args) > 1 else "salary"
    if source is None:
        await update.message.reply_text("❌ Pague a fatura com 'salario' ou 'cofre'.")
        return

    ledger = get_ledger(update, context)
    payment = ledger.pay_invoice(parse_amount(args[0]), source)
    origin = "do cofre" if source == "vault" else "do salário"
    await update.message.reply_text(
        f"💳 Pagamento de {format_currency(payment.amount)} {origin} registrado: {payment.name}"
    )
