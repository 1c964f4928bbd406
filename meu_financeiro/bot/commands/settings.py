# meu_financeiro/bot/commands/settings.py
from telegram import Update
from telegram.ext import ContextTypes

from meu_financeiro.bot.commands.utils import finance_command, get_ledger
from meu_financeiro.core.models import CreditCard
from meu_financeiro.utils.text_utils import format_currency, normalize_text, parse_amount

# Campo digitado no /cartao -> atributo do cartão
CARD_FIELDS = {
    "limite": "limit",
    "fechamento": "closing_day",
    "vencimento": "due_day",
    "melhor_dia": "best_buy_day",
    "nome": "name",
}


def describe_card(card: CreditCard) -> str:
    return (
        f"💳 {card.name}\n"
        f"Limite: {format_currency(card.limit)}\n"
        f"Fechamento: dia {card.closing_day}\n"
        f"Vencimento: dia {card.due_day}\n"
        f"Melhor dia de compra: dia {card.best_buy_day}"
    )


@finance_command
async def reserva_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Mostra ou altera o percentual do salário reservado para emergências."""
    ledger = get_ledger(update, context)
    if not context.args:
        await update.message.reply_text(
            f"Reserva atual: {ledger.settings.reserve_percentage:g}% do salário.\n"
            "Para alterar: /reserva <percentual> (ex: /reserva 15)"
        )
        return

    settings = ledger.set_reserve_percentage(parse_amount(context.args[0].rstrip("%")))
    await update.message.reply_text(
        f"✅ Reserva de emergência ajustada para {settings.reserve_percentage:g}% do salário."
    )


@finance_command
async def cartao_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Mostra o cartão ou altera um campo: /cartao <campo> <valor>."""
    ledger = get_ledger(update, context)
    args = context.args or []
    if len(args) < 2:
        fields = ", ".join(CARD_FIELDS)
        await update.message.reply_text(
            f"{describe_card(ledger.credit_card)}\n\n"
            f"Para alterar: /cartao <campo> <valor> (campos: {fields})"
        )
        return

    field = CARD_FIELDS.get(normalize_text(args[0]))
    if field is None:
        await update.message.reply_text(
            f"❌ Campo '{args[0]}' não reconhecido. Use: {', '.join(CARD_FIELDS)}"
        )
        return

    raw_value = " ".join(args[1:])
    if field == "name":
        value = raw_value
    elif field == "limit":
        value = parse_amount(raw_value)
    elif raw_value.isdigit():
        value = int(raw_value)
    else:
        await update.message.reply_text(f"❌ '{raw_value}' não é um dia válido (use de 1 a 31).")
        return

    card = ledger.update_credit_card(**{field: value})
    await update.message.reply_text(f"✅ Cartão atualizado!\n\n{describe_card(card)}")
