"""
Routers per API pallet-analysis.

Moduli:
- analysis: Router per analisi testo incollato (POST /analyze, /analyze-file, /analyze-clipboard)
"""
from . import analysis

__all__ = ["analysis"]
