# meu_financeiro/bot/commands/recurring.py
from telegram import Update
from telegram.ext import ContextTypes

from meu_financeiro.bot.commands.utils import finance_command, get_ledger
from meu_financeiro.core.recurring import find_recurring
from meu_financeiro.utils.text_utils import format_currency, format_month_label, parse_amount


@finance_command
async def contas_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Lista as contas fixas do mês com a situação de cada uma."""
    ledger = get_ledger(update, context)
    status = ledger.recurring_status()
    if not status:
        await update.message.reply_text(
            "Nenhuma conta fixa cadastrada. Use /nova_conta <valor> [variavel] <nome>."
        )
        return

    lines = []
    for expense, paid in status:
        amount = "valor variável" if expense.is_variable else format_currency(expense.base_amount)
        lines.append(f"{'✅' if paid else '⏳'} {expense.name}: {amount}")
    pending = sum(1 for _, paid in status if not paid)
    month = format_month_label(ledger.resolve_month(None))
    await update.message.reply_text(
        f"📌 Contas fixas de {month} ({pending} pendente(s)):\n\n" + "\n".join(lines)
    )


@finance_command
async def nova_conta_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Cadastra uma conta fixa: /nova_conta <valor> [variavel] <nome>."""
    args = context.args or []
    if len(args) < 2:
        await update.message.reply_text(
            "Uso: /nova_conta <valor> [variavel] <nome>\n"
            "Ex: /nova_conta 120 Internet\n"
            "Ex: /nova_conta 200 variavel Conta de luz"
        )
        return

    amount = parse_amount(args[0])
    is_variable = args[1].lower() in ("variavel", "variável")
    name_parts = args[2:] if is_variable else args[1:]
    if not name_parts:
        await update.message.reply_text("❌ Informe o nome da conta.")
        return

    expense = get_ledger(update, context).add_recurring_expense(
        " ".join(name_parts), base_amount=amount, is_variable=is_variable
    )
    await update.message.reply_text(f"✅ Conta fixa '{expense.name}' cadastrada!")


@finance_command
async def pagar_conta_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Lança o pagamento do mês de uma conta fixa: /pagar_conta <nome> [valor]."""
    args = context.args or []
    if not args:
        await update.message.reply_text("Uso: /pagar_conta <nome> [valor]\nEx: /pagar_conta Luz 187,35")
        return

    amount = None
    name_parts = args
    if len(args) > 1:
        try:
            amount = parse_amount(args[-1])
            name_parts = args[:-1]
        except ValueError:
            amount = None

    ledger = get_ledger(update, context)
    matches = find_recurring(ledger.recurring_expenses, " ".join(name_parts))
    if not matches:
        await update.message.reply_text(
            f"❌ Conta fixa '{' '.join(name_parts)}' não encontrada. Veja as contas com /contas."
        )
        return

    payment = ledger.launch_recurring_expense(matches[0].id, amount)
    await update.message.reply_text(
        f"✅ {payment.name} paga: {format_currency(payment.amount)}"
    )
