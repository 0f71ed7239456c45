"""
Configurazione per pallet-analysis usando pydantic-settings.

Gestisce le variabili d'ambiente del processor (marker header, limiti,
politica anomalie numeriche).
"""
import logging
from typing import Literal
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Carica .env
load_dotenv()

logger = logging.getLogger(__name__)


class AnalyzerConfig(BaseSettings):
    """Configurazione completa del processor."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server
    port: int = Field(default=8001, description="Porta server FastAPI")

    # Parsing
    header_marker: str = Field(default="Pallet (", min_length=1, description="Substring che identifica la riga header")
    max_input_bytes: int = Field(default=5_000_000, ge=1, description="Dimensione massima testo incollato/caricato")

    # Aggregazione
    top_customers_limit: int = Field(default=5, ge=1, le=100, description="Numero clienti nella classifica top")
    numeric_anomaly_policy: Literal["propagate", "skip"] = Field(
        default="propagate",
        description="propagate: NaN resta nei totali; skip: valore escluso dalle somme"
    )

    # Processor info
    processor_name: str = Field(default="Pallet Analysis Processor", description="Nome processor")
    processor_version: str = Field(default="1.0.0", description="Versione processor")

    def validate_config(self) -> bool:
        """Valida configurazione critica."""
        errors = []

        if not self.header_marker.strip():
            errors.append("HEADER_MARKER non può essere solo spazi")

        if self.numeric_anomaly_policy == "propagate":
            logger.info("Numeric anomaly policy: propagate (NaN visibile nei totali)")

        if errors:
            error_msg = "❌ Configurazione processor non valida:\n" + "\n".join(f"  - {error}" for error in errors)
            logger.error(error_msg)
            raise ValueError(error_msg)

        logger.info("✅ Configurazione processor validata con successo")
        return True


# Istanza globale configurazione
_config: AnalyzerConfig | None = None


def get_config() -> AnalyzerConfig:
    """Ottiene istanza configurazione (singleton)."""
    global _config
    if _config is None:
        _config = AnalyzerConfig()
        _config.validate_config()
    return _config


def validate_config() -> bool:
    """Valida configurazione critica (funzione standalone)."""
    config = get_config()
    return config.validate_config()


def reset_config() -> None:
    """Scarta la configurazione in cache (usato dai test dopo modifiche env)."""
    global _config
    _config = None
