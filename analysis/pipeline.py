"""
Pipeline Orchestratore: testo grezzo → Parser → Aggregator.

Ogni chiamata riparte da zero: nessuno stato condiviso tra invocazioni.
Gli errori di parsing interrompono la pipeline senza risultato parziale.
"""
import logging
import time
from typing import Optional

from core.config import AnalyzerConfig, get_config
from core.logger import log_json, set_request_context, get_request_context
from analysis.aggregator import aggregate
from analysis.errors import ParseError
from analysis.parser import parse_text
from analysis.types import ProcessOutcome

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def process_text(
    raw_text: str,
    config: Optional[AnalyzerConfig] = None,
    source: str = "text",
    correlation_id: Optional[str] = None,
) -> ProcessOutcome:
    """
    Elabora un blocco di testo incollato.

    Args:
        raw_text: Testo copiato dal programma di carico
        config: Configurazione (default: get_config())
        source: Canale di input per logging ('text', 'upload', 'clipboard')
        correlation_id: ID correlazione per logging (genera se None)

    Returns:
        ProcessOutcome con testo parsato e risultato (None se nessun record)

    Raises:
        ParseError: testo vuoto, troppo corto o senza header
    """
    if config is None:
        config = get_config()

    set_request_context(source=source, correlation_id=correlation_id)
    correlation_id = get_request_context().get("correlation_id")

    start = time.perf_counter()
    try:
        parsed = parse_text(raw_text, header_marker=config.header_marker)
    except ParseError as e:
        log_json(
            level='warning',
            message=f"Parse failed: {e.code}",
            correlation_id=correlation_id,
            stage='parse',
            elapsed_ms=_elapsed_ms(start),
            decision='error',
            error_code=e.code,
        )
        raise

    log_json(
        level='info',
        message="Parse completed",
        correlation_id=correlation_id,
        stage='parse',
        rows_total=parsed.lines_total,
        records=len(parsed.records),
        elapsed_ms=_elapsed_ms(start),
        decision='ok',
        header_index=parsed.header_index,
        columns=len(parsed.headers),
    )

    start = time.perf_counter()
    result = aggregate(
        parsed.records,
        top_n=config.top_customers_limit,
        anomaly_policy=config.numeric_anomaly_policy,
    )

    clean = result is None or (result.totals_are_finite and not result.has_anomalies)
    log_json(
        level='info' if clean else 'warning',
        message="Aggregation completed" if result is not None else "No data rows after header",
        correlation_id=correlation_id,
        stage='aggregate',
        records=len(parsed.records),
        anomalies=len(result.anomalies) if result is not None else 0,
        elapsed_ms=_elapsed_ms(start),
        decision='ok' if result is not None else 'empty',
        totals_finite=result.totals_are_finite if result is not None else True,
    )

    return ProcessOutcome(parsed=parsed, result=result)
