from datetime import date, datetime
from typing import Optional, Union

from core.query_composer import normalize_cnpj


def format_cnpj(value: Optional[str]) -> str:
    """'12345678000190' → '12.345.678/0001-90' ; autre longueur : inchangé."""
    digits = normalize_cnpj(value or "")
    if len(digits) != 14:
        return value or ""
    return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"


def format_brl(value: Optional[float]) -> str:
    """1234567.8 → 'R$ 1.234.567,80'."""
    if value is None:
        return ""
    text = f"{float(value):,.2f}"
    return "R$ " + text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_date_br(value: Union[None, str, date, datetime]) -> str:
    """Date ISO ou objet date → 'dd/mm/aaaa' ; valeur illisible renvoyée telle quelle."""
    if value in (None, ""):
        return ""
    if isinstance(value, (date, datetime)):
        return value.strftime("%d/%m/%Y")
    try:
        return datetime.fromisoformat(str(value)[:10]).strftime("%d/%m/%Y")
    except ValueError:
        return str(value)
