# tests/test_installments.py
import itertools
import unittest

from meu_financeiro.core.errors import TransactionValidationError
from meu_financeiro.core.installments import (
    check_installment_count,
    generate_installment_transactions,
    split_amount,
)
from meu_financeiro.core.models import ExpenseTransaction


def purchase(amount=120, date="2025-01-31", name="Geladeira"):
    return ExpenseTransaction(
        name=name, amount=amount, category="lifestyle", payment_type="credit", date=date,
    )


class TestSplitAmount(unittest.TestCase):
    def test_even_split(self):
        self.assertEqual(split_amount(120, 3), [40.0, 40.0, 40.0])

    def test_last_leg_absorbs_remainder(self):
        legs = split_amount(100, 3)
        self.assertEqual(legs, [33.33, 33.33, 33.34])
        self.assertAlmostEqual(sum(legs), 100, places=2)

    def test_too_small_to_split(self):
        with self.assertRaises(TransactionValidationError):
            split_amount(0.05, 6)

    def test_sub_cent_total_is_rejected(self):
        with self.assertRaises(TransactionValidationError):
            split_amount(10.555, 2)
        self.assertEqual(split_amount(10.55, 2), [5.27, 5.28])

    def test_installment_count_range(self):
        self.assertEqual(check_installment_count(12), 12)
        for bad in (0, 13, -1, 2.5, True):
            with self.assertRaises(TransactionValidationError):
                check_installment_count(bad)


class TestGenerateInstallments(unittest.TestCase):
    def setUp(self):
        counter = itertools.count(1)
        self.id_factory = lambda: f"id-{next(counter)}"

    def test_three_legs(self):
        legs = generate_installment_transactions(purchase(date="2025-05-10"), 3, self.id_factory)
        self.assertEqual(len(legs), 3)
        self.assertEqual(sum(leg.amount for leg in legs), 120)
        self.assertEqual([leg.date for leg in legs], ["2025-05-10", "2025-06-10", "2025-07-10"])
        self.assertEqual([leg.current_installment for leg in legs], [1, 2, 3])
        self.assertTrue(all(leg.installments == 3 for leg in legs))

    def test_group_links(self):
        legs = generate_installment_transactions(purchase(), 3, self.id_factory)
        anchor = legs[0]
        self.assertEqual(anchor.id, "id-1")
        self.assertIsNone(anchor.parent_id)
        self.assertEqual([leg.parent_id for leg in legs[1:]], [anchor.id, anchor.id])
        self.assertEqual(len({leg.id for leg in legs}), 3)

    def test_names_and_clamped_dates(self):
        legs = generate_installment_transactions(purchase(date="2025-01-31"), 3, self.id_factory)
        self.assertEqual(
            [leg.name for leg in legs],
            ["Geladeira (1/3)", "Geladeira (2/3)", "Geladeira (3/3)"],
        )
        self.assertEqual([leg.date for leg in legs], ["2025-01-31", "2025-02-28", "2025-03-31"])

    def test_long_name_is_truncated(self):
        legs = generate_installment_transactions(purchase(name="x" * 200), 12, self.id_factory)
        self.assertTrue(all(len(leg.name) <= 200 for leg in legs))
        self.assertTrue(legs[-1].name.endswith(" (12/12)"))

    def test_legs_keep_category_and_payment(self):
        legs = generate_installment_transactions(purchase(), 2, self.id_factory)
        self.assertTrue(all(leg.payment_type == "credit" for leg in legs))
        self.assertTrue(all(leg.category == "lifestyle" for leg in legs))


if __name__ == "__main__":
    unittest.main()
