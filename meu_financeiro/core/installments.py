# meu_financeiro/core/installments.py
from decimal import ROUND_DOWN, Decimal
from typing import Callable, List

from meu_financeiro.config import MAX_INSTALLMENTS, MAX_NAME_LENGTH
from meu_financeiro.core.cycle import add_months
from meu_financeiro.core.errors import TransactionValidationError
from meu_financeiro.core.models import ExpenseTransaction, new_id

CENT = Decimal("0.01")


def check_installment_count(installment_count: int) -> int:
    if isinstance(installment_count, bool) or not isinstance(installment_count, int):
        raise TransactionValidationError("installments: o número de parcelas deve ser inteiro")
    if not 1 <= installment_count <= MAX_INSTALLMENTS:
        raise TransactionValidationError(
            f"installments: use entre 1 e {MAX_INSTALLMENTS} parcelas"
        )
    return installment_count


def split_amount(total: float, installment_count: int) -> List[float]:
    """Divide um valor em parcelas de centavos exatos.

    Todas as parcelas recebem o valor truncado em centavos e a última
    absorve a diferença, então a soma é sempre igual ao total.
    """
    check_installment_count(installment_count)
    exact_total = Decimal(str(total))
    total_cents = exact_total.quantize(CENT)
    if total_cents != exact_total:
        raise TransactionValidationError("amount: o valor deve ter no máximo 2 casas decimais")
    share = (total_cents / installment_count).quantize(CENT, rounding=ROUND_DOWN)
    if share < CENT:
        raise TransactionValidationError(
            "amount: valor pequeno demais para dividir nessa quantidade de parcelas"
        )
    last = total_cents - share * (installment_count - 1)
    return [float(share)] * (installment_count - 1) + [float(last)]


def _leg_name(name: str, index: int, installment_count: int) -> str:
    suffix = f" ({index}/{installment_count})"
    return name[: MAX_NAME_LENGTH - len(suffix)].rstrip() + suffix


def generate_installment_transactions(
    purchase: ExpenseTransaction,
    installment_count: int,
    id_factory: Callable[[], str] = new_id,
) -> List[ExpenseTransaction]:
    """Gera uma parcela por mês a partir de uma compra no crédito.

    A primeira parcela é a âncora do grupo; as demais apontam para ela em
    `parent_id`.
    """
    amounts = split_amount(purchase.amount, installment_count)
    anchor_id = id_factory()
    legs = []
    for index, amount in enumerate(amounts):
        legs.append(
            ExpenseTransaction(
                id=anchor_id if index == 0 else id_factory(),
                name=_leg_name(purchase.name, index + 1, installment_count),
                amount=amount,
                date=add_months(purchase.date, index),
                category=purchase.category,
                payment_type=purchase.payment_type,
                installments=installment_count,
                current_installment=index + 1,
                parent_id=None if index == 0 else anchor_id,
            )
        )
    return legs
