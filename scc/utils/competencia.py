"""Helpers de competência (ano-mês) e de códigos do ERP."""

from datetime import date, datetime
from typing import Optional, Tuple
import calendar

from scc.errors import ValidationError


def parse_competencia(value: Optional[str]) -> date:
    """
    Converte 'YYYY-MM' ou 'YYYY-MM-DD' no primeiro dia do mês.

    Raises:
        ValidationError: se o valor estiver vazio ou fora do formato
    """
    if not value:
        raise ValidationError("Competência é obrigatória")
    text = str(value).strip()[:7]
    try:
        parsed = datetime.strptime(text, "%Y-%m")
    except ValueError:
        raise ValidationError("Competência inválida", details=f"Formato esperado AAAA-MM: {value}")
    return date(parsed.year, parsed.month, 1)


def competencia_range(inicio: date) -> Tuple[date, date]:
    """Primeiro e último dia do mês da competência."""
    ultimo_dia = calendar.monthrange(inicio.year, inicio.month)[1]
    return date(inicio.year, inicio.month, 1), date(inicio.year, inicio.month, ultimo_dia)


def format_competencia(value: Optional[date]) -> Optional[str]:
    if value is None:
        return None
    return value.strftime("%Y-%m")


def pad_codigo(codigo, size: int) -> str:
    """Completa o código com zeros à esquerda e corta no tamanho da coluna."""
    text = str(codigo if codigo is not None else "").strip()
    return text.zfill(size)[:size]
