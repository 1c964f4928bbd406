# meu_financeiro/core/aggregation.py
"""
Agregações do orçamento.

Funções puras sobre a lista completa de lançamentos: nada aqui guarda
estado, então chamar duas vezes com a mesma lista dá o mesmo resultado.
"""
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional

from meu_financeiro.config import DEFAULT_BEST_BUY_DAY
from meu_financeiro.core.cycle import invoice_month_of, parse_month
from meu_financeiro.core.models import (
    CreditCard,
    ExpenseCategory,
    IncomeCategory,
    MonthlyTotals,
    PaymentType,
    Transaction,
    VaultDestinationType,
    VoucherBalances,
)

Predicate = Callable[[Transaction], bool]


def _cents(amount: float) -> Decimal:
    return Decimal(str(amount))


def _sum(transactions: Iterable[Transaction], predicate: Predicate) -> Decimal:
    """Soma exata em centavos; quem chama converte para float no fim."""
    return sum((_cents(t.amount) for t in transactions if predicate(t)), Decimal(0))


def _is_income(category: IncomeCategory) -> Predicate:
    return lambda t: t.type == "income" and t.category == category


def _is_expense_paid_with(payment_type: PaymentType) -> Predicate:
    return lambda t: t.type == "expense" and t.payment_type == payment_type


def _is_vault_withdrawal(t: Transaction) -> bool:
    return t.type == "expense" and t.category == ExpenseCategory.VAULT_WITHDRAWAL


def best_buy_day_of(credit_card: Optional[CreditCard]) -> int:
    return credit_card.best_buy_day if credit_card else DEFAULT_BEST_BUY_DAY


def month_transactions(transactions: Iterable[Transaction], month: str) -> List[Transaction]:
    """Lançamentos com data dentro do mês, mais recentes primeiro."""
    parse_month(month)
    in_month = [t for t in transactions if t.month == month]
    return sorted(in_month, key=lambda t: t.date, reverse=True)


def invoice_transactions(
    transactions: Iterable[Transaction], month: str, best_buy_day: int
) -> List[Transaction]:
    """Compras no crédito que compõem a fatura do mês."""
    parse_month(month)
    return [
        t for t in transactions
        if t.type == "expense"
        and t.payment_type == PaymentType.CREDIT
        and invoice_month_of(t.date, best_buy_day) == month
    ]


def monthly_totals(
    transactions: Iterable[Transaction],
    month: str,
    credit_card: Optional[CreditCard] = None,
) -> MonthlyTotals:
    """Calcula todos os totais de um mês 'AAAA-MM'.

    Entradas e saídas do orçamento principal não incluem depósitos no cofre,
    retiradas de uso direto nem os vales. A fatura do cartão é montada pelo
    mês de cobrança de cada compra, não pela data em que ela aconteceu.
    """
    transactions = list(transactions)
    best_buy_day = best_buy_day_of(credit_card)
    in_month = month_transactions(transactions, month)

    salary_income = _sum(in_month, _is_income(IncomeCategory.SALARY))
    extra_values_income = _sum(in_month, _is_income(IncomeCategory.EXTRA_VALUES))
    vault_to_income = _sum(
        in_month,
        lambda t: _is_vault_withdrawal(t)
        and t.destination_type == VaultDestinationType.INCOME_TRANSFER,
    )
    debit_expenses = _sum(
        in_month,
        lambda t: _is_expense_paid_with(PaymentType.DEBIT)(t) and not _is_vault_withdrawal(t),
    )
    invoice_total = _sum(invoice_transactions(transactions, month, best_buy_day), lambda t: True)

    return MonthlyTotals(
        month=month,
        salary_income=float(salary_income),
        extra_values_income=float(extra_values_income),
        vault_to_income=float(vault_to_income),
        income=float(salary_income + extra_values_income + vault_to_income),
        food_voucher_income=float(_sum(in_month, _is_income(IncomeCategory.FOOD_VOUCHER))),
        transport_voucher_income=float(
            _sum(in_month, _is_income(IncomeCategory.TRANSPORT_VOUCHER))
        ),
        food_voucher_expenses=float(
            _sum(in_month, _is_expense_paid_with(PaymentType.FOOD_VOUCHER))
        ),
        transport_voucher_expenses=float(
            _sum(in_month, _is_expense_paid_with(PaymentType.TRANSPORT_VOUCHER))
        ),
        vault_deposits=float(_sum(in_month, _is_income(IncomeCategory.EXTRA))),
        vault_withdrawals=float(_sum(in_month, _is_vault_withdrawal)),
        debit_expenses=float(debit_expenses),
        invoice_total=float(invoice_total),
        expenses=float(debit_expenses + invoice_total),
        fixed_expenses=float(_sum(
            in_month,
            lambda t: t.type == "expense" and t.category == ExpenseCategory.FIXED_BILLS,
        )),
    )


def used_limit(
    transactions: Iterable[Transaction], best_buy_day: int, reference_month: str
) -> float:
    """Limite usado do cartão: soma tudo o que cai na fatura atual e nas futuras."""
    parse_month(reference_month)
    return float(_sum(
        transactions,
        lambda t: t.type == "expense"
        and t.payment_type == PaymentType.CREDIT
        and invoice_month_of(t.date, best_buy_day) >= reference_month,
    ))


def vault_balance(transactions: Iterable[Transaction]) -> float:
    """Saldo do cofre em todo o histórico (depósitos - todas as retiradas)."""
    transactions = list(transactions)
    deposits = _sum(transactions, _is_income(IncomeCategory.EXTRA))
    withdrawals = _sum(transactions, _is_vault_withdrawal)
    return float(deposits - withdrawals)


def voucher_balances(transactions: Iterable[Transaction]) -> VoucherBalances:
    """Saldo de cada vale em todo o histórico."""
    transactions = list(transactions)
    food = _sum(transactions, _is_income(IncomeCategory.FOOD_VOUCHER)) - _sum(
        transactions, _is_expense_paid_with(PaymentType.FOOD_VOUCHER)
    )
    transport = _sum(transactions, _is_income(IncomeCategory.TRANSPORT_VOUCHER)) - _sum(
        transactions, _is_expense_paid_with(PaymentType.TRANSPORT_VOUCHER)
    )
    return VoucherBalances(food=float(food), transport=float(transport))


def expenses_by_category(transactions: Iterable[Transaction], month: str) -> Dict[str, float]:
    """Soma das saídas do mês por categoria (retiradas do cofre ficam de fora)."""
    totals: Dict[str, Decimal] = {}
    for t in month_transactions(transactions, month):
        if t.type != "expense" or _is_vault_withdrawal(t):
            continue
        totals[t.category.value] = totals.get(t.category.value, Decimal(0)) + _cents(t.amount)
    return {category: float(total) for category, total in totals.items()}
