# tests/test_text_utils.py
import unittest

from meu_financeiro.utils.text_utils import (
    format_currency,
    format_date_br,
    format_month_label,
    normalize_text,
    parse_amount,
)


class TestTextUtils(unittest.TestCase):
    def test_normalize_empty_string(self):
        self.assertEqual(normalize_text(""), "")
        self.assertEqual(normalize_text(None), "")

    def test_normalize_accents_and_case(self):
        self.assertEqual(normalize_text("Alimentação"), "alimentacao")
        self.assertEqual(normalize_text("SAÚDE"), "saude")

    def test_normalize_separators(self):
        self.assertEqual(normalize_text("Contas Fixas"), "contas_fixas")
        self.assertEqual(normalize_text("  ticket-alimentação "), "ticket_alimentacao")
        self.assertEqual(normalize_text("Lazer / Estilo de Vida"), "lazer_estilo_de_vida")

    def test_parse_amount_brazilian_format(self):
        self.assertEqual(parse_amount("50,90"), 50.9)
        self.assertEqual(parse_amount("1.234,56"), 1234.56)
        self.assertEqual(parse_amount("R$ 20"), 20.0)
        self.assertEqual(parse_amount("120.5"), 120.5)

    def test_parse_amount_invalid(self):
        for bad in ("", "abc", "12,3,4", "nan"):
            with self.assertRaises(ValueError):
                parse_amount(bad)

    def test_format_currency(self):
        self.assertEqual(format_currency(1234.5), "R$ 1.234,50")
        self.assertEqual(format_currency(0), "R$ 0,00")
        self.assertEqual(format_currency(-35.2), "-R$ 35,20")

    def test_format_month_and_date(self):
        self.assertEqual(format_month_label("2025-07"), "julho de 2025")
        self.assertEqual(format_date_br("2025-07-10"), "10/07/2025")


if __name__ == "__main__":
    unittest.main()
