# meu_financeiro/utils/labels.py
from typing import Dict, Optional, Type, TypeVar
from enum import Enum

from meu_financeiro.core.models import (
    ExpenseCategory,
    IncomeCategory,
    PaymentType,
    VaultDestinationType,
)
from meu_financeiro.utils.text_utils import normalize_text

E = TypeVar("E", bound=Enum)

CATEGORY_LABELS: Dict[str, str] = {
    "fixed_bills": "Contas Fixas",
    "food": "Alimentação",
    "transport": "Transporte",
    "health": "Saúde",
    "lifestyle": "Lazer / Estilo de Vida",
    "vault_withdrawal": "Retirada do Cofre",
    "salary": "Salário",
    "extra": "Ganhos Extras (Cofre)",
    "extra_values": "Valores Extras",
    "food_voucher": "Ticket Alimentação",
    "transport_voucher": "Ticket Mobilidade",
}

CATEGORY_ICONS: Dict[str, str] = {
    "fixed_bills": "💡",
    "food": "🍽️",
    "transport": "🚗",
    "health": "🏥",
    "lifestyle": "🎮",
    "vault_withdrawal": "🔓",
    "salary": "💰",
    "extra": "💵",
    "extra_values": "➕",
    "food_voucher": "🍴",
    "transport_voucher": "🚌",
}

PAYMENT_TYPE_LABELS: Dict[str, str] = {
    "debit": "Débito",
    "credit": "Cartão de Crédito",
    "food_voucher": "Ticket Alimentação",
    "transport_voucher": "Ticket Mobilidade",
}

DESTINATION_LABELS: Dict[str, str] = {
    "INCOME_TRANSFER": "Transferir para a renda",
    "DIRECT_USE": "Uso direto",
}

# Apelidos digitados no bot, além do valor do enum e do rótulo
_ALIASES: Dict[str, str] = {
    "contas": "fixed_bills",
    "comida": "food",
    "mercado": "food",
    "lazer": "lifestyle",
    "cofre": "vault_withdrawal",
    "salario": "salary",
    "extra": "extra",
    "extras": "extra_values",
    "va": "food_voucher",
    "vr": "food_voucher",
    "vt": "transport_voucher",
    "debito": "debit",
    "pix": "debit",
    "credito": "credit",
    "cartao": "credit",
    "renda": "INCOME_TRANSFER",
    "uso": "DIRECT_USE",
}


def _lookup(enum_cls: Type[E], text: str, labels: Dict[str, str]) -> Optional[E]:
    wanted = normalize_text(text)
    if not wanted:
        return None
    for member in enum_cls:
        names = {normalize_text(member.value), normalize_text(labels.get(member.value, ""))}
        if wanted in names or _ALIASES.get(wanted) == member.value:
            return member
    return None


def parse_expense_category(text: str) -> Optional[ExpenseCategory]:
    return _lookup(ExpenseCategory, text, CATEGORY_LABELS)


def parse_income_category(text: str) -> Optional[IncomeCategory]:
    return _lookup(IncomeCategory, text, CATEGORY_LABELS)


def parse_payment_type(text: str) -> Optional[PaymentType]:
    return _lookup(PaymentType, text, PAYMENT_TYPE_LABELS)


def parse_destination_type(text: str) -> Optional[VaultDestinationType]:
    return _lookup(VaultDestinationType, text, DESTINATION_LABELS)


def category_label(category) -> str:
    value = getattr(category, "value", category)
    return f"{CATEGORY_ICONS.get(value, '')} {CATEGORY_LABELS.get(value, value)}".strip()
