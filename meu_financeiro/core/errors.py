# meu_financeiro/core/errors.py


class FinanceError(Exception):
    """Base para todos os erros recuperáveis do núcleo financeiro."""


class TransactionValidationError(FinanceError, ValueError):
    """Os dados informados não respeitam o contrato de um lançamento."""


class PersistenceError(FinanceError):
    """A leitura ou escrita no Supabase falhou."""


class RejectedOperationError(FinanceError):
    """Operação sem efeito possível (id inexistente, saldo insuficiente, conta já paga...)."""
