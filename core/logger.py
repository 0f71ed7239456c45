"""
Logging strutturato per pallet-analysis.

Unifica logging colorato e structured logging con supporto JSON.
"""
import logging
import json
import uuid
import sys
import contextvars
from typing import Optional, Dict, Any
from datetime import datetime, timezone

import colorlog

# Context variables per tracciare richieste
_request_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar('request_context', default={})


def setup_colored_logging(service_name: str = "processor"):
    """
    Configura logging colorato con colorlog.

    - ROSSO per ERROR
    - BLU per INFO
    - GIALLO per WARNING
    - Normale per DEBUG

    Args:
        service_name: Nome del servizio per identificare log
    """
    handler = colorlog.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)

    formatter = colorlog.ColoredFormatter(
        f'%(log_color)s[%(levelname)s]%(reset)s %(cyan)s{service_name}%(reset)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        reset=True,
        log_colors={
            'DEBUG': 'white',
            'INFO': 'blue',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'red,bg_white',
        },
        secondary_log_colors={},
        style='%'
    )

    handler.setFormatter(formatter)

    # Configura root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)

    # Rimuovi handler esistenti
    root_logger.handlers = []
    root_logger.addHandler(handler)

    # Riduci verbosità librerie server
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
    logging.getLogger('multipart').setLevel(logging.WARNING)

    return root_logger


def set_request_context(source: Optional[str] = None, correlation_id: Optional[str] = None):
    """
    Imposta contesto richiesta per logging strutturato.

    Args:
        source: Canale di input ('text', 'upload', 'clipboard')
        correlation_id: ID correlazione (genera se None)
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())

    context = {}
    if source is not None:
        context["source"] = source
    context["correlation_id"] = correlation_id

    _request_context.set(context)


def get_request_context() -> Dict[str, Any]:
    """Recupera contesto richiesta corrente."""
    return _request_context.get({})


def get_correlation_id() -> Optional[str]:
    """Recupera correlation ID dal contesto, None se non impostato."""
    return get_request_context().get("correlation_id")


def _context_fields(source: Optional[str], correlation_id: Optional[str]) -> Dict[str, Any]:
    """Campi di contesto: valori espliciti o quelli della richiesta corrente."""
    ctx = get_request_context()
    fields = {
        "correlation_id": correlation_id or ctx.get("correlation_id"),
        "source": source or ctx.get("source"),
    }
    return {k: v for k, v in fields.items() if v}


def log_with_context(level: str, message: str, source: Optional[str] = None, correlation_id: Optional[str] = None):
    """Log testuale con prefisso [correlation_id=...] [source=...]."""
    prefix = "".join(f"[{k}={v}] " for k, v in _context_fields(source, correlation_id).items())
    logger = logging.getLogger(__name__)
    getattr(logger, level.lower(), logger.info)(prefix + message)


def log_json(
    level: str,
    message: str,
    stage: str,
    correlation_id: Optional[str] = None,
    **metrics
) -> Dict[str, Any]:
    """
    Log di uno stage pipeline come singola riga JSON.

    Args:
        level: 'info', 'warning', 'error', 'debug'
        message: Messaggio da loggare
        stage: Stage pipeline ('parse', 'aggregate')
        correlation_id: ID correlazione (usa contesto se None)
        **metrics: Conteggi e tempi dello stage (records, anomalies,
            elapsed_ms, decision, ...); i valori None sono omessi

    Returns:
        Il dict serializzato
    """
    log_data: Dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level.upper(),
        "message": message,
        "stage": stage,
        **_context_fields(None, correlation_id),
    }
    log_data.update({k: v for k, v in metrics.items() if v is not None})

    logger = logging.getLogger(__name__)
    getattr(logger, level.lower(), logger.info)(json.dumps(log_data, ensure_ascii=False))
    return log_data
