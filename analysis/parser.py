"""
Parser testo tab-delimitato copiato dal programma di carico.

Individua la riga header dentro testo "sporco" (righe di intestazione,
filtri, titoli prima della tabella) e mappa ogni riga dati sui nomi colonna.
"""
import logging
from typing import List, Optional

from analysis.errors import EmptyInputError, InsufficientRowsError, NoHeaderFoundError
from analysis.types import ParsedText, Record

logger = logging.getLogger(__name__)

HEADER_MARKER = "Pallet ("
SEPARATOR = "\t"


def find_header_index(lines: List[str], marker: str = HEADER_MARKER) -> Optional[int]:
    """
    Ritorna l'indice della prima riga che contiene il marker (testo non trimmato).

    Args:
        lines: Righe del testo
        marker: Substring che identifica la riga header

    Returns:
        Indice della riga header o None se assente
    """
    for idx, line in enumerate(lines):
        if marker in line:
            return idx
    return None


def build_record(headers: List[str], values: List[str]) -> Record:
    """
    Associa posizionalmente valori e nomi colonna.

    Colonne oltre la lunghezza minima vengono scartate; con nomi colonna
    duplicati vince l'ultima colonna.
    """
    record: Record = {}
    for col_name, value in zip(headers, values):
        record[col_name] = value
    return record


def parse_text(raw_text: str, header_marker: str = HEADER_MARKER) -> ParsedText:
    """
    Parse del blocco di testo incollato.

    Args:
        raw_text: Testo grezzo (righe separate da '\\n', celle da tab)
        header_marker: Substring che identifica la riga header

    Returns:
        ParsedText con header (non trimmati) e record nell'ordine di input

    Raises:
        EmptyInputError: testo vuoto o solo spazi
        InsufficientRowsError: meno di due righe
        NoHeaderFoundError: nessuna riga contiene il marker
    """
    text = (raw_text or "").strip()
    if not text:
        raise EmptyInputError()

    # Clipboard Windows: '\r\n' → rimuovi '\r' finale prima dello split celle
    lines = [line.rstrip("\r") for line in text.split("\n")]
    if len(lines) < 2:
        raise InsufficientRowsError(f"Solo {len(lines)} riga presente, servono almeno 2")

    header_index = find_header_index(lines, header_marker)
    if header_index is None:
        logger.warning(f"[PARSER] Header marker '{header_marker}' non trovato in {len(lines)} righe")
        raise NoHeaderFoundError(f"Nessuna riga contiene '{header_marker}'")

    headers = lines[header_index].split(SEPARATOR)
    if header_index > 0:
        logger.debug(f"[PARSER] Saltate {header_index} righe prima dell'header")

    records: List[Record] = []
    for line in lines[header_index + 1:]:
        if not line.strip():
            continue
        records.append(build_record(headers, line.split(SEPARATOR)))

    logger.info(
        f"[PARSER] Testo parsato: {len(lines)} righe, header alla riga {header_index}, "
        f"{len(headers)} colonne, {len(records)} record"
    )

    return ParsedText(
        headers=headers,
        records=records,
        header_index=header_index,
        lines_total=len(lines),
    )
