# meu_financeiro/core/ledger.py
"""
Orquestração das escritas do orçamento de um usuário.

O `FinanceLedger` guarda o estado carregado do Supabase (lançamentos, cartão,
configurações e contas fixas). Toda escrita segue a mesma ordem: valida,
grava no banco e só então troca o estado em memória. Se o banco falhar, o
estado continua exatamente como estava.
"""
import datetime
import logging
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError
from supabase import Client

from meu_financeiro.config import DEFAULT_CREDIT_CARD
from meu_financeiro.core import db
from meu_financeiro.core.aggregation import (
    month_transactions,
    monthly_totals,
    vault_balance,
    voucher_balances,
)
from meu_financeiro.core.budget import credit_card_usage, monthly_budget, spending_status
from meu_financeiro.core.cycle import current_month
from meu_financeiro.core.errors import RejectedOperationError, TransactionValidationError
from meu_financeiro.core.installments import (
    check_installment_count,
    generate_installment_transactions,
)
from meu_financeiro.core.models import (
    CreditCard,
    CreditCardUsage,
    ExpenseCategory,
    FinanceSettings,
    IncomeCategory,
    MonthSummary,
    PaymentType,
    RecurringExpense,
    Transaction,
    VaultDestinationType,
    describe_validation_error,
    new_id,
    validate_transaction_input,
)
from meu_financeiro.core.recurring import is_paid, recurring_status

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

VAULT_TRANSFER_NAME = "Transferência para Reserva (Cofre)"
INVOICE_PAYMENT_REASON = "Pagamento da fatura do cartão"
INVOICE_SOURCES = ("salary", "vault")


def _build(model_cls: Type[M], data: Dict[str, Any]) -> M:
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise TransactionValidationError(describe_validation_error(e)) from e


class FinanceLedger:
    def __init__(
        self,
        supabase_client: Client,
        user_id: Optional[str] = None,
        today_provider: Callable[[], datetime.date] = datetime.date.today,
        id_factory: Callable[[], str] = new_id,
    ):
        self.supabase_client = supabase_client
        self.user_id = user_id
        self.today_provider = today_provider
        self.id_factory = id_factory

        self.transactions: List[Transaction] = []
        self.credit_card = CreditCard(**DEFAULT_CREDIT_CARD)
        self.settings = FinanceSettings()
        self.recurring_expenses: List[RecurringExpense] = []

    def _today(self) -> str:
        return self.today_provider().isoformat()

    def resolve_month(self, month: Optional[str]) -> str:
        return month or current_month(self.today_provider())

    def _find(self, transaction_id: str) -> Union[Transaction, None]:
        return next((t for t in self.transactions if t.id == transaction_id), None)

    # --- Leitura ---

    def load(self) -> "FinanceLedger":
        """Carrega tudo do Supabase. Cartão e configurações ausentes usam os padrões."""
        transactions = db.get_transactions(self.supabase_client, self.user_id)
        card = db.get_credit_card(self.supabase_client, self.user_id)
        settings = db.get_settings(self.supabase_client, self.user_id)
        recurring = db.get_recurring_expenses(self.supabase_client, self.user_id)

        self.transactions = transactions
        self.credit_card = card or CreditCard(**DEFAULT_CREDIT_CARD)
        self.settings = settings or FinanceSettings()
        self.recurring_expenses = recurring
        logger.debug(
            "Usuário %s: %d lançamentos carregados", self.user_id, len(transactions)
        )
        return self

    # --- Lançamentos ---

    def add_transaction(
        self, data: Dict[str, Any], installment_count: Optional[int] = None
    ) -> List[Transaction]:
        """Valida e grava um lançamento novo.

        Compras no crédito com mais de uma parcela viram um grupo de parcelas
        gravado numa única requisição. Devolve os lançamentos criados.
        """
        transaction = validate_transaction_input(data, today=self.today_provider())
        count = check_installment_count(installment_count) if installment_count is not None else 1

        if (
            transaction.type == "expense"
            and transaction.category == ExpenseCategory.VAULT_WITHDRAWAL
        ):
            available = vault_balance(self.transactions)
            if Decimal(str(transaction.amount)) > Decimal(str(available)):
                raise RejectedOperationError(
                    f"Saldo insuficiente no cofre (disponível: {available:.2f})"
                )

        if (
            count > 1
            and transaction.type == "expense"
            and transaction.payment_type == PaymentType.CREDIT
        ):
            created = generate_installment_transactions(transaction, count, self.id_factory)
            db.insert_transactions(self.supabase_client, created, self.user_id)
        else:
            created = [transaction.model_copy(update={"id": self.id_factory()})]
            db.insert_transaction(self.supabase_client, created[0], self.user_id)

        self.transactions = created + self.transactions
        logger.info(
            "Usuário %s: %s '%s' de %.2f registrado (%d lançamento(s))",
            self.user_id, transaction.type, transaction.name, transaction.amount, len(created),
        )
        return created

    def remove_transaction(self, transaction_id: str) -> List[str]:
        """Remove um lançamento. Uma parcela remove o grupo inteiro de parcelas."""
        target = self._find(transaction_id)
        if target is None:
            raise RejectedOperationError(f"Lançamento {transaction_id} não encontrado")

        group_id = target.group_id
        ids = [
            t.id for t in self.transactions
            if t.id == group_id or t.parent_id == group_id
        ]
        db.delete_transactions(self.supabase_client, ids)

        removed = set(ids)
        self.transactions = [t for t in self.transactions if t.id not in removed]
        return ids

    # --- Cofre e fatura ---

    def transfer_to_vault(self, amount: float) -> Transaction:
        """Guarda dinheiro no cofre (entrada da categoria 'extra')."""
        return self.add_transaction({
            "type": "income",
            "name": VAULT_TRANSFER_NAME,
            "amount": amount,
            "category": IncomeCategory.EXTRA,
            "date": self._today(),
        })[0]

    def withdraw_from_vault(
        self, amount: float, reason: str, destination_type: VaultDestinationType
    ) -> Transaction:
        """Retira do cofre para a renda do mês ou para uso direto."""
        return self.add_transaction({
            "type": "expense",
            "name": "Retirada do Cofre",
            "amount": amount,
            "category": ExpenseCategory.VAULT_WITHDRAWAL,
            "payment_type": PaymentType.DEBIT,
            "date": self._today(),
            "reason": reason,
            "destination_type": destination_type,
        })[0]

    def pay_invoice(self, amount: float, source: str = "salary") -> Transaction:
        """Registra o pagamento da fatura do cartão com o salário ou com o cofre.

        Pelo salário vira uma conta fixa no débito; pelo cofre vira uma
        retirada de uso direto (e precisa de saldo no cofre).
        """
        if source not in INVOICE_SOURCES:
            raise TransactionValidationError("source: use 'salary' ou 'vault'")
        data: Dict[str, Any] = {
            "type": "expense",
            "name": f"Pagamento Fatura - {self.credit_card.name}",
            "amount": amount,
            "payment_type": PaymentType.DEBIT,
            "date": self._today(),
        }
        if source == "vault":
            data.update({
                "category": ExpenseCategory.VAULT_WITHDRAWAL,
                "reason": INVOICE_PAYMENT_REASON,
                "destination_type": VaultDestinationType.DIRECT_USE,
            })
        else:
            data["category"] = ExpenseCategory.FIXED_BILLS
        return self.add_transaction(data)[0]

    # --- Configurações ---

    def update_credit_card(self, **changes: Any) -> CreditCard:
        """Altera o cartão. Se ele nunca foi gravado, cria o registro."""
        changes.pop("id", None)
        card = _build(CreditCard, {**self.credit_card.model_dump(), **changes})
        if card.id is None:
            card = db.insert_credit_card(self.supabase_client, card, self.user_id)
        else:
            db.update_credit_card(self.supabase_client, card)
        self.credit_card = card
        return card

    def set_reserve_percentage(self, percentage: float) -> FinanceSettings:
        settings = _build(
            FinanceSettings, {"id": self.settings.id, "reserve_percentage": percentage}
        )
        if settings.id is None:
            settings = db.insert_settings(self.supabase_client, settings, self.user_id)
        else:
            db.update_reserve_percentage(
                self.supabase_client, settings.id, settings.reserve_percentage
            )
        self.settings = settings
        return settings

    # --- Contas fixas ---

    def add_recurring_expense(
        self,
        name: str,
        base_amount: float = 0.0,
        category: ExpenseCategory = ExpenseCategory.FIXED_BILLS,
        is_variable: bool = False,
    ) -> RecurringExpense:
        expense = _build(RecurringExpense, {
            "id": self.id_factory(),
            "name": name,
            "base_amount": base_amount,
            "category": category,
            "is_variable": is_variable,
        })
        db.insert_recurring_expense(self.supabase_client, expense, self.user_id)
        self.recurring_expenses = sorted(
            self.recurring_expenses + [expense], key=lambda e: e.name.lower()
        )
        return expense

    def recurring_status(self, month: Optional[str] = None) -> List[Tuple[RecurringExpense, bool]]:
        return recurring_status(
            self.recurring_expenses, self.transactions, self.resolve_month(month)
        )

    def launch_recurring_expense(
        self, recurring_id: str, amount: Optional[float] = None
    ) -> Transaction:
        """Lança a conta fixa do mês atual como saída no débito."""
        expense = next((e for e in self.recurring_expenses if e.id == recurring_id), None)
        if expense is None:
            raise RejectedOperationError(f"Conta fixa {recurring_id} não encontrada")

        month_items = month_transactions(self.transactions, self.resolve_month(None))
        if is_paid(expense.name, month_items):
            raise RejectedOperationError(f"A conta '{expense.name}' já foi paga este mês")

        if amount is None:
            if expense.is_variable:
                raise TransactionValidationError(
                    f"amount: informe o valor da conta '{expense.name}', ele varia todo mês"
                )
            amount = expense.base_amount

        return self.add_transaction({
            "type": "expense",
            "name": expense.name,
            "amount": amount,
            "category": expense.category,
            "payment_type": PaymentType.DEBIT,
            "date": self._today(),
        })[0]

    # --- Visões calculadas ---

    def credit_card_usage(self, reference_month: Optional[str] = None) -> CreditCardUsage:
        return credit_card_usage(
            self.credit_card, self.transactions, self.resolve_month(reference_month)
        )

    def summary(self, month: Optional[str] = None) -> MonthSummary:
        """Resumo do mês, recalculado do zero a partir dos lançamentos."""
        month = self.resolve_month(month)
        totals = monthly_totals(self.transactions, month, self.credit_card)
        budget = monthly_budget(totals, self.settings.reserve_percentage)
        return MonthSummary(
            month=month,
            totals=totals,
            budget=budget,
            spending_status=spending_status(budget.available_limit, budget.salary_income),
            vault_balance=vault_balance(self.transactions),
            vouchers=voucher_balances(self.transactions),
            card_usage=self.credit_card_usage(month),
            transactions=month_transactions(self.transactions, month),
        )
