"""
Estrazione campi dai record con default espliciti per campo.

Distingue "campo assente" da "campo presente ma vuoto" e normalizza
i numeri in formato olandese (virgola decimale).
"""
import math
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from analysis.types import Record

PALLET_FIELD = "Pallet (49)"
TYPE_FIELD = "Omschrijving"
CUSTOMER_FIELD = "Klant"
COLLI_FIELD = "Colli"
WEIGHT_FIELD = "Bruto"

UNKNOWN = "Onbekend"

# Prefisso numerico: segno, cifre, decimali opzionali, esponente opzionale
_NUMBER_PREFIX = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')


@dataclass
class FieldLookup:
    value: Optional[str]
    present: bool

    @property
    def is_empty(self) -> bool:
        return not self.present or not self.value


def get_field(record: Record, name: str) -> FieldLookup:
    if name not in record or record[name] is None:
        return FieldLookup(value=None, present=False)
    return FieldLookup(value=record[name], present=True)


def parse_number(text: str) -> float:
    """
    Interpreta il prefisso numerico di una stringa.

    Spazi iniziali ammessi, caratteri finali ignorati ("12 kg" → 12.0).

    Returns:
        float finito, oppure NaN se la stringa non inizia con un numero
        o il numero è fuori range ("1e999")
    """
    match = _NUMBER_PREFIX.match(text)
    if not match:
        return math.nan
    value = float(match.group(1))
    if not math.isfinite(value):
        return math.nan
    return value


def pallet_number(record: Record) -> str:
    lookup = get_field(record, PALLET_FIELD)
    return lookup.value.strip() if lookup.present else ""


def pallet_type(record: Record) -> str:
    lookup = get_field(record, TYPE_FIELD)
    if lookup.is_empty or not lookup.value.strip():
        return UNKNOWN
    return lookup.value.strip()


def customer(record: Record) -> str:
    # Nome cliente non trimmato: "A" e "A " sono clienti diversi
    lookup = get_field(record, CUSTOMER_FIELD)
    return UNKNOWN if lookup.is_empty else lookup.value


def _numeric(record: Record, name: str, decimal_comma: bool, blank_is_zero: bool) -> Tuple[float, Optional[str]]:
    """Ritorna (valore, raw non interpretabile o None)."""
    lookup = get_field(record, name)
    if lookup.is_empty or (blank_is_zero and not lookup.value.strip()):
        raw = "0"
    else:
        raw = lookup.value
    text = raw.replace(",", ".") if decimal_comma else raw
    value = parse_number(text)
    if math.isnan(value):
        return value, raw
    return value, None


def colli(record: Record) -> Tuple[float, Optional[str]]:
    """Colli: mancante, vuoto o non interpretabile vale 0."""
    value, bad_raw = _numeric(record, COLLI_FIELD, decimal_comma=False, blank_is_zero=True)
    if bad_raw is not None:
        return 0.0, bad_raw
    return value, None


def weight(record: Record) -> Tuple[float, Optional[str]]:
    """
    Peso lordo con virgola decimale.

    Solo campo assente o stringa vuota vale "0"; una cella di soli spazi
    non è un numero e resta NaN.
    """
    return _numeric(record, WEIGHT_FIELD, decimal_comma=True, blank_is_zero=False)
