# meu_financeiro/bot/commands/summary.py
from telegram import Update
from telegram.ext import ContextTypes

from meu_financeiro.bot.commands.utils import (
    finance_command,
    format_transaction_line,
    get_ledger,
    month_arg,
)
from meu_financeiro.core.aggregation import invoice_transactions
from meu_financeiro.core.budget import STATUS_CRITICAL, STATUS_GOOD, STATUS_WARNING
from meu_financeiro.core.cycle import due_date_of
from meu_financeiro.utils.text_utils import format_currency, format_date_br, format_month_label

STATUS_ICONS = {STATUS_GOOD: "🟢", STATUS_WARNING: "🟡", STATUS_CRITICAL: "🔴"}


@finance_command
async def resumo_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Mostra o resumo do orçamento de um mês."""
    ledger = get_ledger(update, context)
    summary = ledger.summary(month_arg(context.args))
    totals, budget = summary.totals, summary.budget

    await update.message.reply_text(
        f"📊 Resumo de {format_month_label(summary.month)}\n\n"
        f"Entradas: {format_currency(totals.income)}\n"
        f"  Salário: {format_currency(totals.salary_income)}\n"
        f"  Valores extras: {format_currency(totals.extra_values_income)}\n"
        f"  Vindo do cofre: {format_currency(totals.vault_to_income)}\n"
        f"Saídas: {format_currency(totals.expenses)}\n"
        f"  Débito: {format_currency(totals.debit_expenses)}\n"
        f"  Fatura do cartão: {format_currency(totals.invoice_total)}\n"
        f"Saldo: {format_currency(totals.balance)}\n\n"
        f"Reserva ({budget.reserve_percentage:g}%): {format_currency(budget.reserve)}\n"
        f"{STATUS_ICONS[summary.spending_status]} Disponível para gastar: "
        f"{format_currency(budget.available_limit)}\n\n"
        f"💳 Cartão: {format_currency(summary.card_usage.used_limit)} usados de "
        f"{format_currency(summary.card_usage.card.limit)}\n"
        f"🏦 Cofre: {format_currency(summary.vault_balance)}"
    )


@finance_command
async def fatura_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Lista as compras que compõem a fatura de um mês."""
    ledger = get_ledger(update, context)
    month = ledger.resolve_month(month_arg(context.args))
    card = ledger.credit_card
    items = sorted(
        invoice_transactions(ledger.transactions, month, card.best_buy_day),
        key=lambda t: t.date,
    )
    usage = ledger.credit_card_usage(month)

    header = (
        f"💳 Fatura de {format_month_label(month)} ({card.name})\n"
        f"Vencimento: {format_date_br(due_date_of(month, card.due_day))}\n"
        f"Total: {format_currency(sum(t.amount for t in items))}\n"
        f"{STATUS_ICONS[usage.status]} Limite usado: {format_currency(usage.used_limit)} "
        f"({usage.used_percentage:.0f}%), disponível {format_currency(usage.available)}"
    )
    if not items:
        await update.message.reply_text(f"{header}\n\nNenhuma compra nesta fatura.")
        return
    lines = "\n".join(format_transaction_line(t) for t in items)
    await update.message.reply_text(f"{header}\n\n{lines}")


@finance_command
async def cofre_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Mostra o saldo do cofre."""
    ledger = get_ledger(update, context)
    summary = ledger.summary()
    await update.message.reply_text(
        f"🏦 Saldo do cofre: {format_currency(summary.vault_balance)}\n"
        f"Guardado este mês: {format_currency(summary.totals.vault_deposits)}\n"
        f"Retirado este mês: {format_currency(summary.totals.vault_withdrawals)}"
    )


@finance_command
async def vales_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Mostra os saldos dos tickets alimentação e mobilidade."""
    vouchers = get_ledger(update, context).summary().vouchers
    await update.message.reply_text(
        f"🍴 Ticket Alimentação: {format_currency(vouchers.food)}\n"
        f"🚌 Ticket Mobilidade: {format_currency(vouchers.transport)}"
    )


@finance_command
async def lancamentos_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Lista os lançamentos de um mês, mais recentes primeiro."""
    summary = get_ledger(update, context).summary(month_arg(context.args))
    if not summary.transactions:
        await update.message.reply_text(
            f"Nenhum lançamento em {format_month_label(summary.month)}."
        )
        return
    lines = "\n".join(format_transaction_line(t) for t in summary.transactions)
    await update.message.reply_text(
        f"📋 Lançamentos de {format_month_label(summary.month)}:\n\n{lines}"
    )
