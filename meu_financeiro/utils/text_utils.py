# meu_financeiro/utils/text_utils.py
import re
import unicodedata
from decimal import Decimal, InvalidOperation

MONTH_NAMES = [
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
]


def normalize_text(s: str) -> str:
    """Normaliza um texto para comparação: sem acentos, minúsculo e com '_' entre as palavras.
    Ex: "Alimentação" -> "alimentacao"
    Ex: "Contas Fixas" -> "contas_fixas"
    Ex: "  ticket-alimentação " -> "ticket_alimentacao"
    """
    if not s:
        return ""
    without_accents = "".join(
        c for c in unicodedata.normalize("NFKD", s) if not unicodedata.combining(c)
    )
    words = [word for word in re.split(r"[^a-zA-Z0-9]+", without_accents) if word]
    return "_".join(word.lower() for word in words)


def parse_amount(text: str) -> float:
    """Converte um valor digitado pelo usuário em float.
    Aceita vírgula decimal e separador de milhar: "1.234,56" -> 1234.56, "50,9" -> 50.9, "R$ 20" -> 20.0
    """
    cleaned = (text or "").strip().replace("R$", "").replace(" ", "")
    if "," in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Valor inválido: {text!r}")
    if not value.is_finite():
        raise ValueError(f"Valor inválido: {text!r}")
    return float(value)


def format_currency(value: float) -> str:
    """Formata no padrão brasileiro: 1234.5 -> 'R$ 1.234,50'."""
    sign = "-" if value < 0 else ""
    us_style = f"{abs(value):,.2f}"
    br_style = us_style.replace(",", "X").replace(".", ",").replace("X", ".")
    return f"{sign}R$ {br_style}"


def format_month_label(month_str: str) -> str:
    """'2025-07' -> 'julho de 2025'."""
    year, month = month_str.split("-")
    return f"{MONTH_NAMES[int(month) - 1]} de {year}"


def format_date_br(date_str: str) -> str:
    """'2025-07-10' -> '10/07/2025'."""
    year, month, day = date_str.split("-")
    return f"{day}/{month}/{year}"
