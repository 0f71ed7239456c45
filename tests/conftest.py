"""
Configurazione pytest e fixture comuni.
"""
import pytest

from core.config import AnalyzerConfig
from tests.samples import HEADER


@pytest.fixture
def analyzer_config():
    """Configurazione esplicita, indipendente da env/.env."""
    return AnalyzerConfig(
        header_marker="Pallet (",
        top_customers_limit=5,
        numeric_anomaly_policy="propagate",
        max_input_bytes=1_000_000,
    )


@pytest.fixture
def sample_text():
    """Esempio end-to-end: pallet 111 ripetuto due volte per il cliente A."""
    return "\n".join([
        HEADER,
        "111\tEuro\tA\t2\t10,5",
        "111\tEuro\tA\t2\t10,5",
        "222\tBlok\tB\t1\t5,0",
    ])


@pytest.fixture
def noisy_text():
    """Testo copiato con righe di intestazione prima della tabella e righe vuote."""
    return "\r\n".join([
        "Verlaadoverzicht rit 4711",
        "Datum\t18-10-2026",
        "",
        HEADER,
        "5839141\tEuro pallet\tJansen BV\t12\t340,5",
        "   ",
        "5839142\tBlokpallet\tJansen BV\t8\t210",
        "5839143\tEuro pallet\tDe Vries\t3\t95,25",
        "",
    ])
