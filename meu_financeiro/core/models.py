# meu_financeiro/core/models.py
"""
Modelos do domínio financeiro.

Um lançamento é uma variante por tipo: `IncomeTransaction` só aceita
categorias de entrada e `ExpenseTransaction` só aceita categorias de saída
(e é a única que tem forma de pagamento e os campos de retirada do cofre).
Os modelos são imutáveis depois de criados.
"""
import datetime
import uuid
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

from meu_financeiro.config import (
    DATE_WINDOW_YEARS,
    DEFAULT_BEST_BUY_DAY,
    DEFAULT_RESERVE_PERCENTAGE,
    MAX_AMOUNT,
    MAX_NAME_LENGTH,
)
from meu_financeiro.core.cycle import add_months, parse_date_parts
from meu_financeiro.core.errors import TransactionValidationError


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class ExpenseCategory(str, Enum):
    FIXED_BILLS = "fixed_bills"
    FOOD = "food"
    TRANSPORT = "transport"
    HEALTH = "health"
    LIFESTYLE = "lifestyle"
    VAULT_WITHDRAWAL = "vault_withdrawal"


class IncomeCategory(str, Enum):
    SALARY = "salary"
    EXTRA = "extra"  # depósito no cofre
    EXTRA_VALUES = "extra_values"
    FOOD_VOUCHER = "food_voucher"
    TRANSPORT_VOUCHER = "transport_voucher"


class PaymentType(str, Enum):
    DEBIT = "debit"
    CREDIT = "credit"
    FOOD_VOUCHER = "food_voucher"
    TRANSPORT_VOUCHER = "transport_voucher"


class VaultDestinationType(str, Enum):
    INCOME_TRANSFER = "INCOME_TRANSFER"
    DIRECT_USE = "DIRECT_USE"


def new_id() -> str:
    """Gera um id novo para um lançamento."""
    return str(uuid.uuid4())


# --- Lançamentos ---

class _TransactionBase(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, extra="forbid")

    id: str = Field(default_factory=new_id, min_length=1)
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    amount: float = Field(gt=0, le=MAX_AMOUNT)
    date: str
    installments: Optional[int] = Field(default=None, ge=1)
    current_installment: Optional[int] = Field(default=None, ge=1)
    parent_id: Optional[str] = None

    @field_validator("amount")
    @classmethod
    def _check_cents(cls, value: float) -> float:
        if Decimal(str(value)).as_tuple().exponent < -2:
            raise ValueError("o valor deve ter no máximo 2 casas decimais")
        return value

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        parse_date_parts(value)
        return value

    @model_validator(mode="after")
    def _check_installment_position(self):
        if self.current_installment is not None:
            if self.installments is None or self.current_installment > self.installments:
                raise ValueError("Parcela atual fora do total de parcelas")
        return self

    @property
    def month(self) -> str:
        return self.date[:7]

    @property
    def group_id(self) -> str:
        """Id do grupo de parcelas (a primeira parcela é a âncora)."""
        return self.parent_id or self.id


class IncomeTransaction(_TransactionBase):
    type: Literal["income"] = "income"
    category: IncomeCategory


class ExpenseTransaction(_TransactionBase):
    type: Literal["expense"] = "expense"
    category: ExpenseCategory
    payment_type: Optional[PaymentType] = None
    reason: Optional[str] = Field(default=None, max_length=500)
    destination_type: Optional[VaultDestinationType] = None

    @model_validator(mode="after")
    def _check_vault_fields(self):
        if self.category != ExpenseCategory.VAULT_WITHDRAWAL and (
            self.reason or self.destination_type
        ):
            raise ValueError("Motivo e destino só existem em retiradas do cofre")
        return self


Transaction = Annotated[
    Union[IncomeTransaction, ExpenseTransaction], Field(discriminator="type")
]

_transaction_adapter = TypeAdapter(Transaction)


def _plain(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in data.items()
    }


def describe_validation_error(error: ValidationError) -> str:
    """Transforma um ValidationError do pydantic em uma frase legível."""
    messages = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"] if part not in ("income", "expense"))
        msg = item["msg"].removeprefix("Value error, ")
        messages.append(f"{field}: {msg}" if field else msg)
    return "; ".join(messages)


def parse_transaction(data: Mapping[str, Any]) -> Union[IncomeTransaction, ExpenseTransaction]:
    """Valida um dicionário e devolve a variante correta do lançamento."""
    try:
        return _transaction_adapter.validate_python(_plain(data))
    except ValidationError as e:
        raise TransactionValidationError(describe_validation_error(e)) from e


def validate_transaction_input(
    data: Mapping[str, Any], today: Union[datetime.date, None] = None
) -> Union[IncomeTransaction, ExpenseTransaction]:
    """Valida um lançamento novo vindo do usuário.

    Além das regras estruturais dos modelos, exige data a no máximo
    DATE_WINDOW_YEARS anos de hoje e motivo/destino nas retiradas do cofre.
    Saídas sem forma de pagamento viram débito. O id é sempre novo.
    """
    payload = _plain(data)
    for key in ("id", "installments", "current_installment", "parent_id"):
        payload.pop(key, None)
    if payload.get("type") == "expense" and not payload.get("payment_type"):
        payload["payment_type"] = PaymentType.DEBIT.value

    transaction = parse_transaction(payload)

    today = today or datetime.date.today()
    lower = add_months(today.isoformat(), -12 * DATE_WINDOW_YEARS)
    upper = add_months(today.isoformat(), 12 * DATE_WINDOW_YEARS)
    if not lower <= transaction.date <= upper:
        raise TransactionValidationError(
            f"date: a data deve estar entre {lower} e {upper}"
        )

    if (
        transaction.type == "expense"
        and transaction.category == ExpenseCategory.VAULT_WITHDRAWAL
    ):
        if not transaction.reason:
            raise TransactionValidationError("reason: informe o motivo da retirada do cofre")
        if transaction.destination_type is None:
            raise TransactionValidationError(
                "destination_type: informe se a retirada vira renda ou uso direto"
            )
    return transaction


# --- Configurações ---

class CreditCard(BaseModel):
    """Configuração do ciclo do cartão. O limite usado é sempre calculado."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: Optional[str] = None
    name: str = Field(default="Cartão Principal", min_length=1, max_length=MAX_NAME_LENGTH)
    limit: float = Field(default=0.0, ge=0, le=MAX_AMOUNT)
    closing_day: int = Field(default=15, ge=1, le=31)
    due_day: int = Field(default=25, ge=1, le=31)
    best_buy_day: int = Field(default=DEFAULT_BEST_BUY_DAY, ge=1, le=31)


class FinanceSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    reserve_percentage: float = Field(default=DEFAULT_RESERVE_PERCENTAGE, ge=0, le=100)


class RecurringExpense(BaseModel):
    """Modelo de conta fixa usado para lançar a saída do mês."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(default_factory=new_id, min_length=1)
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    base_amount: float = Field(default=0.0, ge=0, le=MAX_AMOUNT)
    category: ExpenseCategory = ExpenseCategory.FIXED_BILLS
    is_variable: bool = False
    active: bool = True


# --- Resultados calculados ---

class MonthlyTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: str
    salary_income: float = 0.0
    extra_values_income: float = 0.0
    vault_to_income: float = 0.0
    income: float = 0.0
    food_voucher_income: float = 0.0
    transport_voucher_income: float = 0.0
    food_voucher_expenses: float = 0.0
    transport_voucher_expenses: float = 0.0
    vault_deposits: float = 0.0
    vault_withdrawals: float = 0.0
    debit_expenses: float = 0.0
    invoice_total: float = 0.0
    expenses: float = 0.0
    fixed_expenses: float = 0.0

    @property
    def credit_expenses(self) -> float:
        return self.invoice_total

    @property
    def variable_expenses(self) -> float:
        return self.expenses - self.fixed_expenses

    @property
    def balance(self) -> float:
        return self.income - self.expenses


class MonthlyBudget(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: str
    salary_income: float
    income: float
    fixed_expenses: float
    variable_expenses: float
    reserve_percentage: float
    reserve: float
    available_limit: float


class VoucherBalances(BaseModel):
    model_config = ConfigDict(frozen=True)

    food: float = 0.0
    transport: float = 0.0


class CreditCardUsage(BaseModel):
    model_config = ConfigDict(frozen=True)

    card: CreditCard
    reference_month: str
    used_limit: float
    available: float
    used_percentage: float
    status: str


class MonthSummary(BaseModel):
    """Tudo o que a camada de apresentação precisa para exibir um mês."""

    model_config = ConfigDict(frozen=True)

    month: str
    totals: MonthlyTotals
    budget: MonthlyBudget
    spending_status: str
    vault_balance: float
    vouchers: VoucherBalances
    card_usage: CreditCardUsage
    transactions: List[Transaction] = Field(default_factory=list)
