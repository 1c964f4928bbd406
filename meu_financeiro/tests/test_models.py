# tests/test_models.py
import datetime
import unittest

from pydantic import ValidationError

from meu_financeiro.core.errors import TransactionValidationError
from meu_financeiro.core.models import (
    CreditCard,
    ExpenseTransaction,
    IncomeTransaction,
    PaymentType,
    parse_transaction,
    validate_transaction_input,
)

TODAY = datetime.date(2025, 7, 15)


class TestTransactionModels(unittest.TestCase):
    def test_parse_picks_variant_by_type(self):
        income = parse_transaction({
            "type": "income", "name": "Salário", "amount": 5000,
            "category": "salary", "date": "2025-07-05",
        })
        self.assertIsInstance(income, IncomeTransaction)
        expense = parse_transaction({
            "type": "expense", "name": "Mercado", "amount": 230.5,
            "category": "food", "payment_type": "debit", "date": "2025-07-05",
        })
        self.assertIsInstance(expense, ExpenseTransaction)
        self.assertEqual(expense.month, "2025-07")

    def test_category_must_match_type(self):
        with self.assertRaises(TransactionValidationError):
            parse_transaction({
                "type": "income", "name": "x", "amount": 10,
                "category": "food", "date": "2025-07-05",
            })
        with self.assertRaises(ValidationError):
            ExpenseTransaction(name="x", amount=10, category="salary", date="2025-07-05")

    def test_amount_and_name_bounds(self):
        for amount in (0, -5, 1_000_000_001):
            with self.assertRaises(ValidationError):
                IncomeTransaction(name="x", amount=amount, category="salary", date="2025-07-05")
        with self.assertRaises(ValidationError):
            IncomeTransaction(name="   ", amount=10, category="salary", date="2025-07-05")
        with self.assertRaises(ValidationError):
            IncomeTransaction(name="x" * 201, amount=10, category="salary", date="2025-07-05")

    def test_amount_has_at_most_two_decimals(self):
        IncomeTransaction(name="x", amount=10.5, category="salary", date="2025-07-05")
        with self.assertRaises(TransactionValidationError):
            parse_transaction({
                "type": "expense", "name": "x", "amount": 10.555,
                "category": "food", "payment_type": "debit", "date": "2025-07-05",
            })

    def test_income_rejects_expense_only_fields(self):
        with self.assertRaises(TransactionValidationError):
            parse_transaction({
                "type": "income", "name": "Salário", "amount": 5000,
                "category": "salary", "payment_type": "credit", "date": "2025-07-05",
            })
        with self.assertRaises(ValidationError):
            IncomeTransaction(name="x", amount=10, category="salary", date="2025-07-05", reason="x")

    def test_invalid_calendar_date(self):
        with self.assertRaises(ValidationError):
            IncomeTransaction(name="x", amount=10, category="salary", date="2025-02-29")

    def test_frozen(self):
        t = IncomeTransaction(name="x", amount=10, category="salary", date="2025-07-05")
        with self.assertRaises(ValidationError):
            t.amount = 20

    def test_vault_fields_only_on_withdrawal(self):
        with self.assertRaises(ValidationError):
            ExpenseTransaction(
                name="x", amount=10, category="food", date="2025-07-05", reason="porque sim",
            )

    def test_installment_position(self):
        with self.assertRaises(ValidationError):
            ExpenseTransaction(
                name="x", amount=10, category="food", date="2025-07-05",
                installments=3, current_installment=4,
            )

    def test_group_id(self):
        anchor = ExpenseTransaction(id="a", name="x", amount=10, category="food", date="2025-07-05")
        leg = anchor.model_copy(update={"id": "b", "parent_id": "a"})
        self.assertEqual(anchor.group_id, "a")
        self.assertEqual(leg.group_id, "a")


class TestValidateTransactionInput(unittest.TestCase):
    def _expense(self, **overrides):
        data = {
            "type": "expense", "name": "Almoço", "amount": 35,
            "category": "food", "date": "2025-07-15",
        }
        data.update(overrides)
        return data

    def test_expense_defaults_to_debit(self):
        t = validate_transaction_input(self._expense(), today=TODAY)
        self.assertEqual(t.payment_type, PaymentType.DEBIT)

    def test_caller_cannot_choose_id_or_group(self):
        t = validate_transaction_input(
            self._expense(id="meu-id", parent_id="outro", installments=3, current_installment=2),
            today=TODAY,
        )
        self.assertNotEqual(t.id, "meu-id")
        self.assertIsNone(t.parent_id)
        self.assertIsNone(t.installments)

    def test_date_window(self):
        validate_transaction_input(self._expense(date="2035-07-15"), today=TODAY)
        validate_transaction_input(self._expense(date="2015-07-15"), today=TODAY)
        with self.assertRaises(TransactionValidationError):
            validate_transaction_input(self._expense(date="2035-07-16"), today=TODAY)
        with self.assertRaises(TransactionValidationError):
            validate_transaction_input(self._expense(date="2015-07-14"), today=TODAY)

    def test_withdrawal_requires_reason_and_destination(self):
        with self.assertRaises(TransactionValidationError):
            validate_transaction_input(
                self._expense(category="vault_withdrawal", destination_type="DIRECT_USE"),
                today=TODAY,
            )
        with self.assertRaises(TransactionValidationError):
            validate_transaction_input(
                self._expense(category="vault_withdrawal", reason="Carro"), today=TODAY,
            )
        t = validate_transaction_input(
            self._expense(category="vault_withdrawal", reason="Carro", destination_type="DIRECT_USE"),
            today=TODAY,
        )
        self.assertEqual(t.reason, "Carro")

    def test_error_message_names_the_field(self):
        with self.assertRaises(TransactionValidationError) as ctx:
            validate_transaction_input(self._expense(amount=-1), today=TODAY)
        self.assertIn("amount", str(ctx.exception))


class TestCreditCard(unittest.TestCase):
    def test_defaults(self):
        card = CreditCard()
        self.assertEqual(card.best_buy_day, 7)
        self.assertIsNone(card.id)

    def test_day_bounds(self):
        with self.assertRaises(ValidationError):
            CreditCard(best_buy_day=0)
        with self.assertRaises(ValidationError):
            CreditCard(due_day=32)


if __name__ == "__main__":
    unittest.main()
