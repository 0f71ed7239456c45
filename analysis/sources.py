"""
Sorgenti del testo da analizzare: clipboard di sistema o file caricato.
"""
import logging
from typing import Tuple

import chardet

from analysis.errors import ClipboardUnavailableError

logger = logging.getLogger(__name__)

FALLBACK_ENCODINGS = ['utf-8-sig', 'utf-8', 'cp1252', 'latin-1']


def read_clipboard() -> str:
    """
    Legge il testo dalla clipboard di sistema.

    Nessun retry: in caso di errore l'utente incolla a mano.

    Raises:
        ClipboardUnavailableError: display assente, clipboard vuota o negata
    """
    # Import locale: tkinter manca in molte immagini server
    try:
        import tkinter as tk
    except ImportError as e:
        logger.warning(f"[SOURCES] tkinter non installato: {e}")
        raise ClipboardUnavailableError("tkinter non installato") from e

    try:
        root = tk.Tk()
    except tk.TclError as e:
        logger.warning(f"[SOURCES] Clipboard non disponibile (display): {e}")
        raise ClipboardUnavailableError(f"Display non disponibile: {e}") from e

    try:
        root.withdraw()
        text = root.clipboard_get()
    except tk.TclError as e:
        logger.warning(f"[SOURCES] Lettura clipboard fallita: {e}")
        raise ClipboardUnavailableError(f"Clipboard vuota o non leggibile: {e}") from e
    finally:
        root.destroy()

    logger.info(f"[SOURCES] Letti {len(text)} caratteri dalla clipboard")
    return text


def detect_encoding(file_content: bytes) -> Tuple[str, float]:
    """
    Rileva encoding del contenuto caricato.

    Prova in ordine utf-8-sig → utf-8 → cp1252 → latin-1 (latin-1
    decodifica qualsiasi byte); chardet fornisce solo la confidence.

    Returns:
        Tuple (encoding, confidence)
    """
    detected = chardet.detect(file_content[:10000])
    detected_encoding = detected.get('encoding')
    confidence = detected.get('confidence') or 0.0

    for enc in FALLBACK_ENCODINGS:
        try:
            file_content.decode(enc)
            logger.debug(
                f"[SOURCES] Encoding detection: {enc} "
                f"(chardet={detected_encoding}, confidence={confidence:.2f})"
            )
            return enc, confidence
        except (UnicodeDecodeError, LookupError):
            continue

    return 'latin-1', 0.0


def decode_upload(file_content: bytes) -> str:
    """Decodifica un file di testo salvato dal programma di carico."""
    encoding, _ = detect_encoding(file_content)
    return file_content.decode(encoding)
