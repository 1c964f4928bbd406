# meu_financeiro/core/budget.py
from typing import Iterable, Optional

from meu_financeiro.core.aggregation import used_limit
from meu_financeiro.core.models import (
    CreditCard,
    CreditCardUsage,
    MonthlyBudget,
    MonthlyTotals,
    Transaction,
)

STATUS_GOOD = "good"
STATUS_WARNING = "warning"
STATUS_CRITICAL = "critical"

# Faixas herdadas dos widgets de limite de gastos e do cartão
SPENDING_WARNING_RATIO = 0.20
CARD_WARNING_PERCENTAGE = 70.0
CARD_CRITICAL_PERCENTAGE = 90.0


def _check_percentage(reserve_percentage: float) -> None:
    if not 0 <= reserve_percentage <= 100:
        raise ValueError(f"Percentual de reserva inválido: {reserve_percentage}")


def reserve_amount(salary_income: float, reserve_percentage: float) -> float:
    """Valor reservado do salário para emergências."""
    _check_percentage(reserve_percentage)
    return salary_income * (reserve_percentage / 100)


def available_limit(
    salary_income: float,
    fixed_expenses: float,
    variable_expenses: float,
    reserve_percentage: float,
) -> float:
    """Quanto ainda pode ser gasto no mês. Nunca fica negativo."""
    reserve = reserve_amount(salary_income, reserve_percentage)
    return max(0.0, salary_income - fixed_expenses - variable_expenses - reserve)


def monthly_budget(totals: MonthlyTotals, reserve_percentage: float) -> MonthlyBudget:
    return MonthlyBudget(
        month=totals.month,
        salary_income=totals.salary_income,
        income=totals.income,
        fixed_expenses=totals.fixed_expenses,
        variable_expenses=totals.variable_expenses,
        reserve_percentage=reserve_percentage,
        reserve=reserve_amount(totals.salary_income, reserve_percentage),
        available_limit=available_limit(
            totals.salary_income,
            totals.fixed_expenses,
            totals.variable_expenses,
            reserve_percentage,
        ),
    )


def spending_status(available: float, total: float) -> str:
    if available <= 0:
        return STATUS_CRITICAL
    if total > 0 and available / total < SPENDING_WARNING_RATIO:
        return STATUS_WARNING
    return STATUS_GOOD


def credit_card_usage(
    card: CreditCard,
    transactions: Iterable[Transaction],
    reference_month: str,
) -> CreditCardUsage:
    """Situação do cartão, recalculada a partir dos lançamentos."""
    used = used_limit(transactions, card.best_buy_day, reference_month)
    percentage = (used / card.limit * 100) if card.limit > 0 else (100.0 if used > 0 else 0.0)
    if percentage >= CARD_CRITICAL_PERCENTAGE:
        status = STATUS_CRITICAL
    elif percentage >= CARD_WARNING_PERCENTAGE:
        status = STATUS_WARNING
    else:
        status = STATUS_GOOD
    return CreditCardUsage(
        card=card,
        reference_month=reference_month,
        used_limit=used,
        available=card.limit - used,
        used_percentage=percentage,
        status=status,
    )
