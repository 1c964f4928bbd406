# tests/test_aggregation.py
import random
import unittest

from meu_financeiro.core import aggregation
from meu_financeiro.core.models import CreditCard, ExpenseTransaction, IncomeTransaction


def income(amount, category, date, name="Entrada"):
    return IncomeTransaction(name=name, amount=amount, category=category, date=date)


def expense(amount, category, date, payment_type="debit", name="Saída", **extra):
    return ExpenseTransaction(
        name=name, amount=amount, category=category, date=date,
        payment_type=payment_type, **extra,
    )


def withdrawal(amount, date, destination_type):
    return expense(
        amount, "vault_withdrawal", date,
        reason="Imprevisto", destination_type=destination_type,
    )


class TestMonthlyTotals(unittest.TestCase):
    def setUp(self):
        self.transactions = [
            income(5000, "salary", "2025-07-05"),
            income(300, "extra_values", "2025-07-12"),
            income(800, "extra", "2025-07-06"),
            income(600, "food_voucher", "2025-07-01"),
            income(200, "transport_voucher", "2025-07-01"),
            expense(1200, "fixed_bills", "2025-07-10"),
            expense(150, "food", "2025-07-15"),
            expense(90, "food", "2025-07-16", payment_type="food_voucher"),
            expense(40, "transport", "2025-07-16", payment_type="transport_voucher"),
            withdrawal(200, "2025-07-20", "INCOME_TRANSFER"),
            withdrawal(100, "2025-07-21", "DIRECT_USE"),
            # Crédito: 03/07 cai na fatura de julho, 10/07 na de agosto, 20/06 na de julho
            expense(70, "lifestyle", "2025-07-03", payment_type="credit"),
            expense(400, "lifestyle", "2025-07-10", payment_type="credit"),
            expense(250, "health", "2025-06-20", payment_type="credit"),
            # Outro mês, não entra
            income(5000, "salary", "2025-06-05"),
            expense(99, "food", "2025-06-15"),
        ]

    def test_income_fields(self):
        totals = aggregation.monthly_totals(self.transactions, "2025-07")
        self.assertEqual(totals.salary_income, 5000)
        self.assertEqual(totals.extra_values_income, 300)
        self.assertEqual(totals.vault_to_income, 200)
        self.assertEqual(totals.income, 5500)

    def test_sub_ledgers_stay_out_of_budget(self):
        totals = aggregation.monthly_totals(self.transactions, "2025-07")
        self.assertEqual(totals.food_voucher_income, 600)
        self.assertEqual(totals.transport_voucher_income, 200)
        self.assertEqual(totals.food_voucher_expenses, 90)
        self.assertEqual(totals.transport_voucher_expenses, 40)
        self.assertEqual(totals.vault_deposits, 800)
        self.assertEqual(totals.vault_withdrawals, 300)

    def test_expense_fields(self):
        totals = aggregation.monthly_totals(self.transactions, "2025-07")
        self.assertEqual(totals.debit_expenses, 1350)
        self.assertEqual(totals.invoice_total, 320)
        self.assertEqual(totals.credit_expenses, 320)
        self.assertEqual(totals.expenses, 1670)
        self.assertEqual(totals.fixed_expenses, 1200)
        self.assertEqual(totals.variable_expenses, 470)
        self.assertEqual(totals.balance, 5500 - 1670)

    def test_expenses_is_debit_plus_invoice(self):
        for month in ("2025-06", "2025-07", "2025-08"):
            totals = aggregation.monthly_totals(self.transactions, month)
            self.assertEqual(totals.expenses, totals.debit_expenses + totals.invoice_total)

    def test_credit_purchase_on_the_10th_is_billed_next_month(self):
        purchase = [expense(400, "lifestyle", "2025-03-10", payment_type="credit")]
        self.assertEqual(aggregation.monthly_totals(purchase, "2025-03").invoice_total, 0)
        self.assertEqual(aggregation.monthly_totals(purchase, "2025-04").invoice_total, 400)

    def test_card_best_buy_day_is_used(self):
        purchase = [expense(400, "lifestyle", "2025-03-10", payment_type="credit")]
        card = CreditCard(limit=1000, best_buy_day=15)
        self.assertEqual(aggregation.monthly_totals(purchase, "2025-03", card).invoice_total, 400)

    def test_direct_use_withdrawal_is_not_income(self):
        direct = [withdrawal(200, "2025-07-20", "DIRECT_USE")]
        transfer = [withdrawal(200, "2025-07-20", "INCOME_TRANSFER")]
        self.assertEqual(aggregation.monthly_totals(direct, "2025-07").income, 0)
        self.assertEqual(aggregation.monthly_totals(transfer, "2025-07").income, 200)
        self.assertEqual(aggregation.monthly_totals(direct, "2025-07").expenses, 0)

    def test_empty_month(self):
        totals = aggregation.monthly_totals([], "2025-07")
        self.assertEqual(totals.income, 0)
        self.assertEqual(totals.expenses, 0)

    def test_idempotent(self):
        first = aggregation.monthly_totals(self.transactions, "2025-07")
        second = aggregation.monthly_totals(self.transactions, "2025-07")
        self.assertEqual(first, second)

    def test_invalid_month(self):
        with self.assertRaises(ValueError):
            aggregation.monthly_totals(self.transactions, "07/2025")


class TestUsedLimit(unittest.TestCase):
    def test_sums_current_and_future_invoices(self):
        transactions = [
            expense(100, "food", "2025-06-20", payment_type="credit"),  # fatura 07
            expense(200, "food", "2025-07-10", payment_type="credit"),  # fatura 08
            expense(300, "food", "2025-09-01", payment_type="credit"),  # fatura 09
            expense(50, "food", "2025-05-01", payment_type="credit"),   # fatura 05, já passou
            expense(999, "food", "2025-07-10"),                         # débito
        ]
        self.assertEqual(aggregation.used_limit(transactions, 7, "2025-07"), 600)
        self.assertEqual(aggregation.used_limit(transactions, 7, "2025-08"), 500)
        self.assertEqual(aggregation.used_limit(transactions, 7, "2025-10"), 0)


class TestBalances(unittest.TestCase):
    def setUp(self):
        self.transactions = [
            income(1000, "extra", "2025-01-10"),
            income(500, "extra", "2025-03-10"),
            withdrawal(300, "2025-04-01", "DIRECT_USE"),
            withdrawal(200, "2025-05-01", "INCOME_TRANSFER"),
            income(600, "food_voucher", "2025-04-01"),
            expense(150, "food", "2025-04-03", payment_type="food_voucher"),
            income(200, "transport_voucher", "2025-04-01"),
            expense(80, "transport", "2025-04-03", payment_type="transport_voucher"),
        ]

    def test_vault_balance(self):
        self.assertEqual(aggregation.vault_balance(self.transactions), 1000)

    def test_voucher_balances(self):
        vouchers = aggregation.voucher_balances(self.transactions)
        self.assertEqual(vouchers.food, 450)
        self.assertEqual(vouchers.transport, 120)

    def test_balances_ignore_order(self):
        shuffled = list(self.transactions)
        random.Random(42).shuffle(shuffled)
        self.assertEqual(
            aggregation.vault_balance(shuffled), aggregation.vault_balance(self.transactions)
        )
        self.assertEqual(
            aggregation.voucher_balances(list(reversed(self.transactions))),
            aggregation.voucher_balances(self.transactions),
        )


class TestViews(unittest.TestCase):
    def test_month_transactions_newest_first(self):
        transactions = [
            expense(10, "food", "2025-07-01", name="a"),
            expense(10, "food", "2025-07-20", name="b"),
            expense(10, "food", "2025-08-01", name="c"),
        ]
        names = [t.name for t in aggregation.month_transactions(transactions, "2025-07")]
        self.assertEqual(names, ["b", "a"])

    def test_expenses_by_category(self):
        transactions = [
            expense(10, "food", "2025-07-01"),
            expense(15, "food", "2025-07-02", payment_type="credit"),
            expense(100, "fixed_bills", "2025-07-05"),
            withdrawal(50, "2025-07-06", "DIRECT_USE"),
            income(1000, "salary", "2025-07-05"),
        ]
        self.assertEqual(
            aggregation.expenses_by_category(transactions, "2025-07"),
            {"food": 25, "fixed_bills": 100},
        )


if __name__ == "__main__":
    unittest.main()
