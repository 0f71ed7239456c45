"""
Router per analisi pallet.

Endpoint:
- POST /analyze: analizza testo incollato (JSON)
- POST /analyze-file: analizza file di testo salvato dal programma di carico
- POST /analyze-clipboard: legge la clipboard della macchina locale e analizza
"""
import logging
from typing import Optional

from fastapi import APIRouter, File, HTTPException, Query, UploadFile

from core.config import get_config
from core.logger import get_correlation_id, log_with_context
from analysis.errors import ClipboardUnavailableError, ParseError
from analysis.pipeline import process_text
from analysis.sources import decode_upload, read_clipboard
from api.schemas import AnalyzeRequest, AnalyzeResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])


def _error_detail(error) -> dict:
    return {"code": error.code, "message": error.user_message, "detail": error.detail}


def _check_size(size: int) -> None:
    limit = get_config().max_input_bytes
    if size > limit:
        raise HTTPException(
            status_code=413,
            detail={"code": "InputTooLarge", "message": f"Input di {size} byte oltre il limite di {limit}"}
        )


def _analyze(text: str, source: str, correlation_id: Optional[str]) -> AnalyzeResponse:
    try:
        outcome = process_text(text, source=source, correlation_id=correlation_id)
    except ParseError as e:
        log_with_context("warning", f"Analysis rejected: {e.code} ({e.detail})")
        raise HTTPException(status_code=422, detail=_error_detail(e))

    return AnalyzeResponse.from_outcome(outcome, correlation_id=get_correlation_id())


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(request: AnalyzeRequest, correlation_id: Optional[str] = Query(None)):
    """Analizza il testo incollato dall'utente."""
    _check_size(len(request.text.encode("utf-8")))
    return _analyze(request.text, "text", correlation_id)


@router.post("/analyze-file", response_model=AnalyzeResponse)
async def analyze_file(file: UploadFile = File(...), correlation_id: Optional[str] = Query(None)):
    """Analizza un file di testo tab-delimitato (export o incolla salvato)."""
    content = await file.read()
    _check_size(len(content))
    logger.info(f"[ANALYSIS] File ricevuto: {file.filename} ({len(content)} byte)")
    return _analyze(decode_upload(content), "upload", correlation_id)


@router.post("/analyze-clipboard", response_model=AnalyzeResponse)
async def analyze_clipboard(correlation_id: Optional[str] = Query(None)):
    """
    Legge la clipboard del sistema su cui gira il processor.

    Utile solo in installazione desktop locale; se la lettura fallisce
    il client deve ripiegare su /analyze con testo incollato a mano.
    """
    try:
        text = read_clipboard()
    except ClipboardUnavailableError as e:
        log_with_context("warning", f"Clipboard unavailable: {e.detail}", source="clipboard")
        raise HTTPException(status_code=503, detail=_error_detail(e))

    _check_size(len(text.encode("utf-8")))
    return _analyze(text, "clipboard", correlation_id)
