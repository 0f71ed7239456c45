"""
Errori della pipeline di analisi.

Ogni errore porta un `code` stabile (per il client) e un `user_message`
in olandese, la lingua degli operatori del magazzino.
"""


class ParseError(ValueError):
    """Errore di parsing del testo incollato. Interrompe l'analisi."""

    code = "ParseError"
    user_message = "De gegevens konden niet worden verwerkt."

    def __init__(self, detail: str = ""):
        self.detail = detail or self.user_message
        super().__init__(self.detail)


class EmptyInputError(ParseError):
    code = "EmptyInput"
    user_message = "Geen gegevens gevonden. Kopieer eerst de data uit het verlaadprogramma."


class InsufficientRowsError(ParseError):
    code = "InsufficientRows"
    user_message = "Onvoldoende rijen in gegevens. Controleer de data."


class NoHeaderFoundError(ParseError):
    code = "NoHeaderFound"
    user_message = "Geen geldige header rij gevonden. Controleer de data."


class ClipboardUnavailableError(RuntimeError):
    """Lettura clipboard fallita o negata: l'utente deve incollare a mano."""

    code = "ClipboardUnavailable"
    user_message = "Kan niet automatisch plakken. Kopieer de gegevens en plak ze in het tekstveld."

    def __init__(self, detail: str = ""):
        self.detail = detail or self.user_message
        super().__init__(self.detail)
