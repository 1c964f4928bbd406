# meu_financeiro/core/cycle.py
"""
Aritmética de calendário do ciclo do cartão.

Todas as datas trafegam como strings ISO ('AAAA-MM-DD') e os meses como
'AAAA-MM'. As funções trabalham apenas com os componentes (ano, mês, dia),
sem criar datetimes com fuso horário, para não deslocar compras feitas perto
da virada do mês.
"""
import calendar
import datetime
import re
from typing import Tuple, Union

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def parse_date_parts(date_str: str) -> Tuple[int, int, int]:
    """Quebra 'AAAA-MM-DD' em (ano, mês, dia), validando o calendário."""
    match = _DATE_RE.match(date_str or "")
    if not match:
        raise ValueError(f"Data inválida: {date_str!r} (use AAAA-MM-DD)")
    year, month, day = (int(part) for part in match.groups())
    if not 1 <= month <= 12:
        raise ValueError(f"Mês inválido na data {date_str!r}")
    if not 1 <= day <= calendar.monthrange(year, month)[1]:
        raise ValueError(f"Dia inválido na data {date_str!r}")
    return year, month, day


def parse_month(month_str: str) -> Tuple[int, int]:
    """Quebra 'AAAA-MM' em (ano, mês)."""
    match = _MONTH_RE.match(month_str or "")
    if not match:
        raise ValueError(f"Mês inválido: {month_str!r} (use AAAA-MM)")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Mês inválido: {month_str!r}")
    return year, month


def format_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def format_date(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def _shift(year: int, month: int, n: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + n
    return index // 12, index % 12 + 1


def shift_month(month_str: str, n: int) -> str:
    """Soma n meses (negativo volta) a um 'AAAA-MM'."""
    year, month = parse_month(month_str)
    return format_month(*_shift(year, month, n))


def add_months(date_str: str, n: int) -> str:
    """Soma n meses de calendário a uma data, limitando o dia ao fim do mês destino.

    Ex: add_months('2025-01-31', 1) -> '2025-02-28'
    """
    year, month, day = parse_date_parts(date_str)
    new_year, new_month = _shift(year, month, n)
    last_day = calendar.monthrange(new_year, new_month)[1]
    return format_date(new_year, new_month, min(day, last_day))


def month_of(date_str: str) -> str:
    year, month, _ = parse_date_parts(date_str)
    return format_month(year, month)


def current_month(today: Union[datetime.date, None] = None) -> str:
    today = today or datetime.date.today()
    return format_month(today.year, today.month)


def invoice_month_of(date_str: str, best_buy_day: int) -> str:
    """Mês da fatura em que uma compra no crédito é cobrada.

    Compras antes do melhor dia de compra caem na fatura do próprio mês;
    a partir dele, vão para a fatura do mês seguinte.
    """
    if not 1 <= best_buy_day <= 31:
        raise ValueError(f"Melhor dia de compra inválido: {best_buy_day}")
    year, month, day = parse_date_parts(date_str)
    if day < best_buy_day:
        return format_month(year, month)
    return format_month(*_shift(year, month, 1))


def due_date_of(invoice_month: str, due_day: int) -> str:
    """Data de vencimento da fatura de um mês (dia limitado ao fim do mês)."""
    year, month = parse_month(invoice_month)
    last_day = calendar.monthrange(year, month)[1]
    return format_date(year, month, min(due_day, last_day))
