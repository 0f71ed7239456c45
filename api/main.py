"""
Main FastAPI application per pallet-analysis.

Espone il motore di parsing/aggregazione al renderer esterno
(interfaccia con tabelle e grafici).
"""
import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import get_config, validate_config
from core.logger import setup_colored_logging
from api.routers import analysis

# Configurazione logging colorato
setup_colored_logging("pallet-analysis")
logger = logging.getLogger(__name__)

app = FastAPI(title="Pallet Analysis Processor", version="1.0.0")

# CORS per comunicazione con interfaccia web
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analysis.router)


@app.on_event("startup")
async def startup_event():
    """Valida configurazione al startup"""
    validate_config()
    config = get_config()
    logger.info(
        f"{config.processor_name} v{config.processor_version} ready "
        f"(header_marker='{config.header_marker}', top={config.top_customers_limit}, "
        f"anomaly_policy={config.numeric_anomaly_policy})"
    )


@app.get("/health")
async def health_check():
    """Health check del servizio"""
    try:
        config = get_config()
        return {
            "status": "healthy",
            "service": "pallet-analysis",
            "version": config.processor_version,
            "timestamp": str(datetime.now(timezone.utc)),
            "settings": {
                "header_marker": config.header_marker,
                "top_customers_limit": config.top_customers_limit,
                "numeric_anomaly_policy": config.numeric_anomaly_policy,
            },
            "endpoints": {
                "analyze": "/analyze",
                "analyze_file": "/analyze-file",
                "analyze_clipboard": "/analyze-clipboard",
            }
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return {
            "status": "unhealthy",
            "service": "pallet-analysis",
            "error": str(e),
            "timestamp": str(datetime.now(timezone.utc))
        }
