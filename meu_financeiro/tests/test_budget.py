# tests/test_budget.py
import unittest

from meu_financeiro.core import budget
from meu_financeiro.core.aggregation import monthly_totals
from meu_financeiro.core.models import CreditCard, ExpenseTransaction, IncomeTransaction


class TestBudget(unittest.TestCase):
    def test_reserve_and_available_limit(self):
        transactions = [
            IncomeTransaction(name="Salário", amount=5000, category="salary", date="2025-07-05"),
            ExpenseTransaction(
                name="Aluguel", amount=1200, category="fixed_bills",
                payment_type="debit", date="2025-07-10",
            ),
        ]
        result = budget.monthly_budget(monthly_totals(transactions, "2025-07"), 10)
        self.assertEqual(result.reserve, 500)
        self.assertEqual(result.variable_expenses, 0)
        self.assertEqual(result.available_limit, 3300)

    def test_available_limit_never_negative(self):
        self.assertEqual(budget.available_limit(1000, 900, 300, 10), 0)

    def test_reserve_percentage_bounds(self):
        self.assertEqual(budget.reserve_amount(5000, 0), 0)
        self.assertEqual(budget.reserve_amount(5000, 100), 5000)
        with self.assertRaises(ValueError):
            budget.reserve_amount(5000, 101)
        with self.assertRaises(ValueError):
            budget.available_limit(5000, 0, 0, -1)

    def test_spending_status(self):
        self.assertEqual(budget.spending_status(0, 5000), budget.STATUS_CRITICAL)
        self.assertEqual(budget.spending_status(500, 5000), budget.STATUS_WARNING)
        self.assertEqual(budget.spending_status(1000, 5000), budget.STATUS_GOOD)
        self.assertEqual(budget.spending_status(10, 0), budget.STATUS_GOOD)


class TestCreditCardUsage(unittest.TestCase):
    def setUp(self):
        self.card = CreditCard(limit=1000, best_buy_day=7)

    def _purchase(self, amount, date):
        return ExpenseTransaction(
            name="Compra", amount=amount, category="lifestyle",
            payment_type="credit", date=date,
        )

    def test_usage_good(self):
        usage = budget.credit_card_usage(self.card, [self._purchase(100, "2025-07-01")], "2025-07")
        self.assertEqual(usage.used_limit, 100)
        self.assertEqual(usage.available, 900)
        self.assertEqual(usage.used_percentage, 10)
        self.assertEqual(usage.status, budget.STATUS_GOOD)

    def test_usage_warning_and_critical(self):
        warning = budget.credit_card_usage(self.card, [self._purchase(700, "2025-07-10")], "2025-07")
        self.assertEqual(warning.status, budget.STATUS_WARNING)
        critical = budget.credit_card_usage(self.card, [self._purchase(950, "2025-07-10")], "2025-07")
        self.assertEqual(critical.status, budget.STATUS_CRITICAL)

    def test_zero_limit_card(self):
        card = CreditCard(limit=0)
        self.assertEqual(budget.credit_card_usage(card, [], "2025-07").used_percentage, 0)
        usage = budget.credit_card_usage(card, [self._purchase(10, "2025-07-01")], "2025-07")
        self.assertEqual(usage.status, budget.STATUS_CRITICAL)


if __name__ == "__main__":
    unittest.main()
