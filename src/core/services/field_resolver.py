"""
Column-name resolution for spreadsheet rows.

The sheets were edited by hand over time, so one logical field can live under
several header spellings (with or without accents, spaces or underscores).
Every lookup goes through the candidate tables below instead of ad-hoc
fallback chains at the call sites.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

# Transactional fuel sheet
FIELD_CANDIDATES: dict[str, tuple[str, ...]] = {
    "date": ("DATA", "Data", "data"),
    "time": ("HORA", "Hora", "hora"),
    "vehicle": ("VEICULO", "VEÍCULO", "Veiculo", "Veículo", "CODIGO", "Codigo"),
    "description": ("DESCRICAO", "DESCRIÇÃO", "Descricao", "Descrição"),
    "operator": ("MOTORISTA", "Motorista", "OPERADOR", "Operador"),
    "company": ("EMPRESA", "Empresa"),
    "category": ("CATEGORIA", "Categoria"),
    "record_type": ("TIPO", "Tipo", "TIPO DE OPERACAO", "TIPO DE OPERAÇÃO"),
    "quantity": ("QUANTIDADE", "Quantidade", "QTD", "QUANTIDADE (L)"),
    "arla_quantity": ("QUANTIDADE DE ARLA", "Quantidade de Arla", "ARLA"),
    "location": ("LOCAL", "Local"),
    "destination": ("DESTINO", "Destino", "TIPO DE SAIDA", "TIPO DE SAÍDA"),
    "horimeter_previous": (
        "HORIMETRO ANTERIOR",
        "HORÍMETRO ANTERIOR",
        "Horimetro Anterior",
        "HOR_ANTERIOR",
    ),
    "horimeter_current": (
        "HORIMETRO ATUAL",
        "HORÍMETRO ATUAL",
        "Horimetro Atual",
        "HOR_ATUAL",
        "HORIMETRO",
    ),
    "km_previous": ("KM ANTERIOR", "Km Anterior", "KM_ANTERIOR"),
    "km_current": ("KM ATUAL", "Km Atual", "KM_ATUAL", "KM"),
    "supplier": ("FORNECEDOR", "Fornecedor"),
    "invoice_number": ("NOTA FISCAL", "Nota Fiscal", "NF"),
    "unit_price": ("VALOR UNITÁRIO", "VALOR UNITARIO", "Valor Unitário"),
    "entry_location": ("LOCAL DE ENTRADA", "Local de Entrada", "LOCAL_ENTRADA"),
    "observations": ("OBSERVAÇÃO", "OBSERVACAO", "Observação", "OBS"),
}

# Per-location daily stock sheets
STOCK_FIELD_CANDIDATES: dict[str, tuple[str, ...]] = {
    "date": ("Data", "DATA", "data"),
    "previous_stock": ("Estoque Anterior", "EstoqueAnterior", "ESTOQUE ANTERIOR"),
    "entries": ("Entrada", "ENTRADA", "Entradas"),
    "exits": ("Saida", "Saída", "SAIDA", "Saidas"),
    "exits_to_trucks": (
        "Saida_para_Comboios",
        "Saida_Para_Comboio",
        "Saida para Comboios",
        "Saída para Comboios",
    ),
    "exits_to_equipment": (
        "Saida_para_Equipamentos",
        "Saida_Equipamentos",
        "Saida para Equipamentos",
        "Saída para Equipamentos",
    ),
    "current_stock": ("EstoqueAtual", "Estoque Atual", "ESTOQUE ATUAL"),
}


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def resolve_field(
    row: Mapping[str, Any],
    field: str,
    default: Any = None,
    candidates: Mapping[str, tuple[str, ...]] = FIELD_CANDIDATES,
) -> Any:
    """
    Return the first candidate column of ``field`` holding a value.

    Candidates are tried in order; missing keys, None and blank text are
    skipped. Unknown logical fields resolve to ``default``.
    """
    for key in candidates.get(field, ()):
        value = row.get(key)
        if not is_blank(value):
            return value
    return default


def resolve_text(
    row: Mapping[str, Any],
    field: str,
    candidates: Mapping[str, tuple[str, ...]] = FIELD_CANDIDATES,
) -> str:
    """Resolve a field as stripped text ("" when absent)."""
    value = resolve_field(row, field, candidates=candidates)
    return "" if value is None else str(value).strip()
