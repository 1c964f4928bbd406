# meu_financeiro/bot/commands/__init__.py

from .utils import start_command, help_command
from .summary import (
    cofre_command,
    fatura_command,
    lancamentos_command,
    resumo_command,
    vales_command,
)
from .transactions import ganho_command, gasto_command, remover_command
from .vault import guardar_command, pagar_fatura_command, resgatar_command
from .settings import cartao_command, reserva_command
from .recurring import contas_command, nova_conta_command, pagar_conta_command
from .reports import balanco_command, gastos_por_categoria_command

# Nome do comando no Telegram -> handler
ALL_COMMANDS = {
    "start": start_command,
    "help": help_command,
    "resumo": resumo_command,
    "fatura": fatura_command,
    "cofre": cofre_command,
    "vales": vales_command,
    "lancamentos": lancamentos_command,
    "gasto": gasto_command,
    "ganho": ganho_command,
    "remover": remover_command,
    "guardar": guardar_command,
    "resgatar": resgatar_command,
    "pagar_fatura": pagar_fatura_command,
    "reserva": reserva_command,
    "cartao": cartao_command,
    "contas": contas_command,
    "nova_conta": nova_conta_command,
    "pagar_conta": pagar_conta_command,
    "balanco": balanco_command,
    "gastos_por_categoria": gastos_por_categoria_command,
}
