import math
import re
from typing import Any

_NON_NUMERIC_RE = re.compile(r"[^\d,.\-]")


def parse_amount(value: Any) -> float | None:
    """Read a monetary amount from a model-supplied value.

    Accepts numbers and numeric strings with currency symbols in either
    Brazilian ("R$ 1.500,00") or US ("$1,500.00") notation. Returns None
    when the value is not a finite number.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            amount = float(value)
        except OverflowError:
            return None
        return amount if math.isfinite(amount) else None
    if not isinstance(value, str):
        return None

    text = _NON_NUMERIC_RE.sub("", value)
    if not any(ch.isdigit() for ch in text):
        return None
    try:
        amount = float(_canonical_number(text))
    except ValueError:
        return None
    return amount if math.isfinite(amount) else None


def _canonical_number(text: str) -> str:
    if "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")
    if "," in text:
        whole, _, fraction = text.rpartition(",")
        if text.count(",") == 1 and len(fraction) != 3:
            return f"{whole}.{fraction}"
        return text.replace(",", "")
    # a lone dot is the decimal separator the extraction prompt asks for
    if text.count(".") > 1:
        return text.replace(".", "")
    return text
