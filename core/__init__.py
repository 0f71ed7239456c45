"""
Core functionality per pallet-analysis.

Questo modulo contiene:
- Configurazione (config.py)
- Logging (logger.py)
"""
