# meu_financeiro/bot/commands/transactions.py
import datetime

from telegram import Update
from telegram.ext import ContextTypes

from meu_financeiro.bot.commands.utils import finance_command, get_ledger, split_installments
from meu_financeiro.utils.labels import (
    category_label,
    parse_expense_category,
    parse_income_category,
    parse_payment_type,
)
from meu_financeiro.utils.text_utils import format_currency, format_date_br, parse_amount

GASTO_USAGE = (
    "Uso: /gasto <valor> <categoria> <pagamento> [Nx] <nome>\n"
    "Ex: /gasto 45,90 alimentacao debito Almoço\n"
    "Ex: /gasto 1200 lazer credito 3x Celular novo"
)
GANHO_USAGE = (
    "Uso: /ganho <valor> <categoria> <nome>\n"
    "Ex: /ganho 5000 salario Salário de julho\n"
    "Ex: /ganho 600 va Ticket do mês"
)


@finance_command
async def gasto_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Registra uma saída (parcelada quando for no crédito com Nx)."""
    args = context.args or []
    if len(args) < 4:
        await update.message.reply_text(GASTO_USAGE)
        return

    amount = parse_amount(args[0])
    category = parse_expense_category(args[1])
    if category is None:
        await update.message.reply_text(f"❌ Categoria '{args[1]}' não reconhecida.\n\n{GASTO_USAGE}")
        return
    payment_type = parse_payment_type(args[2])
    if payment_type is None:
        await update.message.reply_text(f"❌ Forma de pagamento '{args[2]}' não reconhecida.\n\n{GASTO_USAGE}")
        return
    installments, name_parts = split_installments(args[3:])
    if not name_parts:
        await update.message.reply_text(GASTO_USAGE)
        return

    ledger = get_ledger(update, context)
    created = ledger.add_transaction(
        {
            "type": "expense",
            "name": " ".join(name_parts),
            "amount": amount,
            "category": category,
            "payment_type": payment_type,
            "date": datetime.date.today().isoformat(),
        },
        installment_count=installments,
    )

    if len(created) > 1:
        legs = "\n".join(
            f"{leg.current_installment}/{leg.installments}: {format_currency(leg.amount)} em {format_date_br(leg.date)}"
            for leg in created
        )
        await update.message.reply_text(
            f"✅ Compra parcelada registrada em {category_label(category)}:\n{legs}"
        )
        return
    await update.message.reply_text(
        f"✅ Saída de {format_currency(created[0].amount)} em {category_label(category)} registrada!"
    )


@finance_command
async def ganho_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Registra uma entrada."""
    args = context.args or []
    if len(args) < 3:
        await update.message.reply_text(GANHO_USAGE)
        return

    amount = parse_amount(args[0])
    category = parse_income_category(args[1])
    if category is None:
        await update.message.reply_text(f"❌ Categoria '{args[1]}' não reconhecida.\n\n{GANHO_USAGE}")
        return

    ledger = get_ledger(update, context)
    created = ledger.add_transaction({
        "type": "income",
        "name": " ".join(args[2:]),
        "amount": amount,
        "category": category,
        "date": datetime.date.today().isoformat(),
    })
    await update.message.reply_text(
        f"✅ Entrada de {format_currency(created[0].amount)} em {category_label(category)} registrada!"
    )


@finance_command
async def remover_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Remove um lançamento pelo id (mostrado em /lancamentos)."""
    if not context.args:
        await update.message.reply_text("Uso: /remover <id>\nVeja os ids com /lancamentos.")
        return

    removed = get_ledger(update, context).remove_transaction(context.args[0])
    if len(removed) > 1:
        await update.message.reply_text(
            f"🗑️ Compra parcelada removida ({len(removed)} parcelas)."
        )
    else:
        await update.message.reply_text("🗑️ Lançamento removido.")
