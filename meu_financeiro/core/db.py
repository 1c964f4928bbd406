# meu_financeiro/core/db.py
import logging
from typing import Any, Dict, List, Optional, Union

from supabase import Client, create_client

from meu_financeiro.config import SUPABASE_KEY, SUPABASE_URL
from meu_financeiro.core.errors import PersistenceError
from meu_financeiro.core.models import (
    CreditCard,
    ExpenseTransaction,
    FinanceSettings,
    RecurringExpense,
    Transaction,
    parse_transaction,
)

logger = logging.getLogger(__name__)

TRANSACTIONS_TABLE = "transactions"
CREDIT_CARDS_TABLE = "credit_cards"
SETTINGS_TABLE = "settings"
RECURRING_TABLE = "recurring_expenses"


def get_supabase_client() -> Client:
    """Retorna uma instância do cliente Supabase."""
    return create_client(SUPABASE_URL, SUPABASE_KEY)


def _owned(query, user_id: Optional[str]):
    return query.eq("user_id", user_id) if user_id else query


# --- Conversão entre linhas do banco e modelos ---

def row_to_transaction(row: Dict[str, Any]) -> Transaction:
    """Converte uma linha da tabela transactions (snake_case) no modelo."""
    data = {
        "id": row.get("id"),
        "name": row.get("name"),
        "amount": float(row["amount"]) if row.get("amount") is not None else None,
        "category": row.get("category"),
        "type": row.get("type"),
        "date": row.get("date"),
        "installments": row.get("installments"),
        "current_installment": row.get("current_installment"),
        "parent_id": row.get("parent_id"),
    }
    if row.get("type") == "expense":
        data.update({
            "payment_type": row.get("payment_type"),
            "reason": row.get("reason"),
            "destination_type": row.get("destination_type"),
        })
    return parse_transaction(data)


def transaction_to_row(transaction: Transaction, user_id: Optional[str] = None) -> Dict[str, Any]:
    row = {
        "id": transaction.id,
        "name": transaction.name,
        "amount": transaction.amount,
        "category": transaction.category.value,
        "type": transaction.type,
        "payment_type": None,
        "date": transaction.date,
        "installments": transaction.installments,
        "current_installment": transaction.current_installment,
        "parent_id": transaction.parent_id,
        "reason": None,
        "destination_type": None,
    }
    if isinstance(transaction, ExpenseTransaction):
        row["payment_type"] = transaction.payment_type.value if transaction.payment_type else None
        row["reason"] = transaction.reason
        row["destination_type"] = (
            transaction.destination_type.value if transaction.destination_type else None
        )
    if user_id:
        row["user_id"] = user_id
    return row


def row_to_credit_card(row: Dict[str, Any]) -> CreditCard:
    # used_limit existe na tabela, mas o valor é sempre recalculado dos lançamentos
    return CreditCard(
        id=row.get("id"),
        name=row.get("name") or "Cartão Principal",
        limit=float(row.get("card_limit") or 0),
        closing_day=row.get("closing_day") or 15,
        due_day=row.get("due_day") or 25,
        best_buy_day=row.get("best_buy_day") or 7,
    )


def credit_card_to_row(card: CreditCard, user_id: Optional[str] = None) -> Dict[str, Any]:
    row = {
        "name": card.name,
        "card_limit": card.limit,
        "closing_day": card.closing_day,
        "due_day": card.due_day,
        "best_buy_day": card.best_buy_day,
    }
    if user_id:
        row["user_id"] = user_id
    return row


def row_to_recurring(row: Dict[str, Any]) -> RecurringExpense:
    return RecurringExpense(
        id=row["id"],
        name=row["name"],
        base_amount=float(row.get("base_amount") or 0),
        category=row.get("category") or "fixed_bills",
        is_variable=bool(row.get("is_variable")),
        active=row.get("active") is not False,
    )


def recurring_to_row(expense: RecurringExpense, user_id: Optional[str] = None) -> Dict[str, Any]:
    row = {
        "id": expense.id,
        "name": expense.name,
        "base_amount": expense.base_amount,
        "category": expense.category.value,
        "is_variable": expense.is_variable,
        "active": expense.active,
    }
    if user_id:
        row["user_id"] = user_id
    return row


# --- Funções para Lançamentos ---

def get_transactions(supabase_client: Client, user_id: Optional[str] = None) -> List[Transaction]:
    """Obtém todos os lançamentos (do usuário, se informado), mais recentes primeiro."""
    try:
        query = _owned(supabase_client.table(TRANSACTIONS_TABLE).select("*"), user_id)
        response = query.order("date", desc=True).execute()
    except Exception as e:
        logger.error("Erro ao obter lançamentos do Supabase: %s", e)
        raise PersistenceError("Falha ao carregar os lançamentos.") from e

    transactions = []
    for row in response.data or []:
        try:
            transactions.append(row_to_transaction(row))
        except (ValueError, TypeError) as e:
            logger.warning("Lançamento %s ignorado por estar inválido: %s", row.get("id"), e)
    return transactions


def insert_transaction(
    supabase_client: Client, transaction: Transaction, user_id: Optional[str] = None
) -> None:
    """Adiciona um lançamento ao Supabase."""
    try:
        supabase_client.table(TRANSACTIONS_TABLE).insert(
            transaction_to_row(transaction, user_id)
        ).execute()
    except Exception as e:
        logger.error("Erro ao adicionar lançamento %s ao Supabase: %s", transaction.id, e)
        raise PersistenceError("Falha ao adicionar o lançamento.") from e
    logger.info("Lançamento %s gravado", transaction.id)


def insert_transactions(
    supabase_client: Client, transactions: List[Transaction], user_id: Optional[str] = None
) -> None:
    """Adiciona vários lançamentos em uma única requisição (tudo ou nada)."""
    if not transactions:
        return
    rows = [transaction_to_row(t, user_id) for t in transactions]
    try:
        supabase_client.table(TRANSACTIONS_TABLE).insert(rows).execute()
    except Exception as e:
        logger.error("Erro ao adicionar %d lançamentos ao Supabase: %s", len(rows), e)
        raise PersistenceError("Falha ao adicionar as parcelas.") from e
    logger.info("%d lançamentos gravados em lote", len(rows))


def delete_transactions(supabase_client: Client, ids: List[str]) -> None:
    """Remove de uma vez todos os lançamentos com os ids informados."""
    if not ids:
        return
    try:
        supabase_client.table(TRANSACTIONS_TABLE).delete().in_("id", list(ids)).execute()
    except Exception as e:
        logger.error("Erro ao remover lançamentos %s do Supabase: %s", ids, e)
        raise PersistenceError("Falha ao remover o lançamento.") from e
    logger.info("Lançamentos removidos: %s", ", ".join(ids))


# --- Funções para o Cartão de Crédito ---

def get_credit_card(supabase_client: Client, user_id: Optional[str] = None) -> Union[CreditCard, None]:
    """Obtém o cartão do usuário (o primeiro cadastrado) ou None."""
    try:
        query = _owned(supabase_client.table(CREDIT_CARDS_TABLE).select("*"), user_id)
        response = query.limit(1).execute()
    except Exception as e:
        logger.error("Erro ao obter cartão do Supabase: %s", e)
        raise PersistenceError("Falha ao carregar o cartão.") from e
    return row_to_credit_card(response.data[0]) if response.data else None


def insert_credit_card(
    supabase_client: Client, card: CreditCard, user_id: Optional[str] = None
) -> CreditCard:
    """Cadastra o cartão e devolve o modelo com o id gerado pelo banco."""
    try:
        response = supabase_client.table(CREDIT_CARDS_TABLE).insert(
            credit_card_to_row(card, user_id)
        ).execute()
    except Exception as e:
        logger.error("Erro ao cadastrar cartão no Supabase: %s", e)
        raise PersistenceError("Falha ao salvar o cartão.") from e
    if response.data:
        return row_to_credit_card(response.data[0])
    return card


def update_credit_card(supabase_client: Client, card: CreditCard) -> None:
    """Atualiza a configuração do cartão."""
    try:
        supabase_client.table(CREDIT_CARDS_TABLE).update(
            credit_card_to_row(card)
        ).eq("id", card.id).execute()
    except Exception as e:
        logger.error("Erro ao atualizar cartão %s: %s", card.id, e)
        raise PersistenceError("Falha ao atualizar o cartão.") from e


# --- Funções para Configurações ---

def get_settings(supabase_client: Client, user_id: Optional[str] = None) -> Union[FinanceSettings, None]:
    """Obtém o registro de configurações (percentual da reserva) ou None."""
    try:
        query = _owned(supabase_client.table(SETTINGS_TABLE).select("*"), user_id)
        response = query.limit(1).execute()
    except Exception as e:
        logger.error("Erro ao obter configurações do Supabase: %s", e)
        raise PersistenceError("Falha ao carregar as configurações.") from e
    if not response.data:
        return None
    row = response.data[0]
    return FinanceSettings(id=row.get("id"), reserve_percentage=float(row["reserve_percentage"]))


def insert_settings(
    supabase_client: Client, settings: FinanceSettings, user_id: Optional[str] = None
) -> FinanceSettings:
    row: Dict[str, Any] = {"reserve_percentage": settings.reserve_percentage}
    if user_id:
        row["user_id"] = user_id
    try:
        response = supabase_client.table(SETTINGS_TABLE).insert(row).execute()
    except Exception as e:
        logger.error("Erro ao criar configurações no Supabase: %s", e)
        raise PersistenceError("Falha ao salvar as configurações.") from e
    if response.data:
        return settings.model_copy(update={"id": response.data[0].get("id")})
    return settings


def update_reserve_percentage(supabase_client: Client, settings_id: str, percentage: float) -> None:
    """Atualiza o percentual da reserva de emergência."""
    try:
        supabase_client.table(SETTINGS_TABLE).update(
            {"reserve_percentage": percentage}
        ).eq("id", settings_id).execute()
    except Exception as e:
        logger.error("Erro ao atualizar percentual da reserva: %s", e)
        raise PersistenceError("Falha ao atualizar a reserva.") from e


# --- Funções para Contas Fixas ---

def get_recurring_expenses(
    supabase_client: Client, user_id: Optional[str] = None
) -> List[RecurringExpense]:
    """Obtém os modelos de contas fixas ordenados pelo nome."""
    try:
        query = _owned(supabase_client.table(RECURRING_TABLE).select("*"), user_id)
        response = query.order("name").execute()
    except Exception as e:
        logger.error("Erro ao obter contas fixas do Supabase: %s", e)
        raise PersistenceError("Falha ao carregar as contas fixas.") from e

    expenses = []
    for row in response.data or []:
        try:
            expenses.append(row_to_recurring(row))
        except ValueError as e:
            logger.warning("Conta fixa %s ignorada por estar inválida: %s", row.get("id"), e)
    return expenses


def insert_recurring_expense(
    supabase_client: Client, expense: RecurringExpense, user_id: Optional[str] = None
) -> None:
    try:
        supabase_client.table(RECURRING_TABLE).insert(recurring_to_row(expense, user_id)).execute()
    except Exception as e:
        logger.error("Erro ao adicionar conta fixa ao Supabase: %s", e)
        raise PersistenceError("Falha ao adicionar a conta fixa.") from e
