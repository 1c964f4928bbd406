# meu_financeiro/core/charts.py
import io
from typing import Iterable, Optional, Union

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
import pandas as pd

from meu_financeiro.core.aggregation import expenses_by_category, monthly_totals
from meu_financeiro.core.cycle import shift_month
from meu_financeiro.core.models import CreditCard, Transaction
from meu_financeiro.utils.labels import CATEGORY_LABELS

# Configurações globais para os gráficos
plt.style.use('seaborn-v0_8-darkgrid')
plt.rcParams['font.family'] = 'sans-serif'
plt.rcParams['font.size'] = 10
plt.rcParams['axes.labelsize'] = 12
plt.rcParams['axes.titlesize'] = 14
plt.rcParams['legend.fontsize'] = 10

COLORS = {
    'Entradas': '#28a745',
    'Saídas': '#dc3545',
    'Saldo': '#007bff',
    'Fatias_Variadas': ['#1f77b4', '#ff7f0e', '#2ca02c', '#d62728', '#9467bd', '#8c564b'],
}

HISTORY_COLUMNS = ['Entradas', 'Saídas', 'Saldo']


def build_monthly_history(transactions: Iterable[Transaction],
                          months: int,
                          credit_card: Optional[CreditCard] = None,
                          end_month: Optional[str] = None) -> pd.DataFrame:
    """Monta um DataFrame com entradas, saídas e saldo dos últimos `months` meses.

    As saídas usam a mesma regra do resumo do mês (débito + fatura do mês),
    então cada linha bate com o que o /resumo mostra.
    """
    if months < 1:
        raise ValueError("Informe pelo menos 1 mês de histórico")
    transactions = list(transactions)
    if end_month is None:
        if not transactions:
            return pd.DataFrame(columns=HISTORY_COLUMNS)
        end_month = max(t.month for t in transactions)

    rows = []
    for offset in range(months - 1, -1, -1):
        totals = monthly_totals(transactions, shift_month(end_month, -offset), credit_card)
        rows.append({
            'mes': totals.month,
            'Entradas': totals.income,
            'Saídas': totals.expenses,
            'Saldo': totals.balance,
        })
    return pd.DataFrame(rows).set_index('mes')


def _to_png() -> io.BytesIO:
    buf = io.BytesIO()
    plt.savefig(buf, format='png', dpi=150)
    buf.seek(0)
    plt.close()
    return buf


def generate_balance_chart(transactions: Iterable[Transaction],
                           months: int,
                           credit_card: Optional[CreditCard] = None,
                           end_month: Optional[str] = None) -> Union[io.BytesIO, None]:
    """Gera o gráfico de balanço mensal (entradas vs. saídas)."""
    history = build_monthly_history(transactions, months, credit_card, end_month)
    if history.empty or not history[['Entradas', 'Saídas']].to_numpy().any():
        return None

    ax = history[HISTORY_COLUMNS].plot(
        kind='bar',
        figsize=(12, 7),
        color=[COLORS[column] for column in HISTORY_COLUMNS],
    )
    plt.title('Balanço Mensal: Entradas vs. Saídas', fontsize=16, fontweight='bold')
    plt.ylabel('Valor (R$)')
    plt.xlabel('Mês/Ano')
    plt.xticks(rotation=45, ha='right')
    plt.legend(title='Tipo')
    plt.grid(axis='y', linestyle='--', alpha=0.7)

    for container in ax.containers:
        ax.bar_label(container, fmt='R$%.2f', fontsize=8, padding=3)
    ax.yaxis.set_major_formatter(mticker.FormatStrFormatter('R$%.2f'))

    plt.tight_layout()
    return _to_png()


def generate_category_spending_chart(transactions: Iterable[Transaction],
                                     month: str) -> Union[io.BytesIO, None]:
    """Gera o gráfico de saídas por categoria de um mês."""
    totals = expenses_by_category(transactions, month)
    if not totals:
        return None

    spending = pd.Series(
        {CATEGORY_LABELS.get(category, category): value for category, value in totals.items()}
    ).sort_values(ascending=False)

    plt.figure(figsize=(12, 7))
    ax = plt.subplot(111)
    bars = ax.bar(spending.index.tolist(), spending.values.tolist(), color=COLORS['Fatias_Variadas'])

    plt.title(f'Saídas por Categoria ({month})', fontsize=16, fontweight='bold')
    plt.ylabel('Valor (R$)')
    plt.xlabel('Categoria')
    plt.xticks(rotation=45, ha='right')
    plt.grid(axis='y', linestyle='--', alpha=0.7)

    ax.bar_label(bars, fmt='R$%.2f', fontsize=8, padding=3)
    ax.yaxis.set_major_formatter(mticker.FormatStrFormatter('R$%.2f'))

    plt.tight_layout()
    return _to_png()
