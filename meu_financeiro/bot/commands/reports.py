# meu_financeiro/bot/commands/reports.py
from telegram import Update
from telegram.ext import ContextTypes

from meu_financeiro.bot.commands.utils import finance_command, get_ledger, month_arg
from meu_financeiro.config import HISTORY_MONTHS
from meu_financeiro.core import charts
from meu_financeiro.utils.text_utils import format_month_label


@finance_command
async def balanco_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Gera e envia o gráfico de balanço dos últimos meses."""
    if context.args and not context.args[0].isdigit():
        await update.message.reply_text("Uso: /balanco [meses] (ex: /balanco 12)")
        return
    months = int(context.args[0]) if context.args else HISTORY_MONTHS
    ledger = get_ledger(update, context)
    await update.message.reply_text("Gerando seu balanço mensal, por favor aguarde...")
    chart_buffer = charts.generate_balance_chart(
        ledger.transactions, months, ledger.credit_card, ledger.resolve_month(None)
    )
    if chart_buffer:
        chart_buffer.name = "balanco_chart.png"
        await update.message.reply_photo(
            photo=chart_buffer, caption=f"Aqui está seu balanço dos últimos {months} meses:"
        )
    else:
        await update.message.reply_text(
            "Ainda não tenho dados suficientes para gerar um balanço. Registre algumas entradas e saídas primeiro!"
        )


@finance_command
async def gastos_por_categoria_command(
    update: Update, context: ContextTypes.DEFAULT_TYPE
) -> None:
    """Gera e envia o gráfico de saídas por categoria de um mês."""
    ledger = get_ledger(update, context)
    month = ledger.resolve_month(month_arg(context.args))
    chart_buffer = charts.generate_category_spending_chart(ledger.transactions, month)
    if chart_buffer:
        chart_buffer.name = "gastos_por_categoria_chart.png"
        await update.message.reply_photo(
            photo=chart_buffer,
            caption=f"Aqui estão suas saídas por categoria em {format_month_label(month)}:",
        )
    else:
        await update.message.reply_text(
            f"Nenhuma saída registrada em {format_month_label(month)}."
        )
