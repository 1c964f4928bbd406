# meu_financeiro/core/recurring.py
from typing import Iterable, List, Tuple

from meu_financeiro.core.aggregation import month_transactions
from meu_financeiro.core.models import RecurringExpense, Transaction
from meu_financeiro.utils.text_utils import normalize_text


def is_paid(name: str, month_items: Iterable[Transaction]) -> bool:
    """Uma conta fixa está paga se existe uma saída do mês com o mesmo nome."""
    wanted = name.strip().lower()
    return any(
        t.type == "expense" and t.name.strip().lower() == wanted
        for t in month_items
    )


def recurring_status(
    recurring_expenses: Iterable[RecurringExpense],
    transactions: Iterable[Transaction],
    month: str,
) -> List[Tuple[RecurringExpense, bool]]:
    """Contas fixas ativas com a situação no mês, pendentes primeiro."""
    month_items = month_transactions(transactions, month)
    status = [
        (expense, is_paid(expense.name, month_items))
        for expense in recurring_expenses
        if expense.active
    ]
    return sorted(status, key=lambda item: item[1])


def find_recurring(recurring_expenses: Iterable[RecurringExpense], name: str) -> List[RecurringExpense]:
    """Busca contas fixas pelo nome, sem diferenciar acentos e maiúsculas."""
    wanted = normalize_text(name)
    return [e for e in recurring_expenses if normalize_text(e.name) == wanted]
