"""
API FastAPI per pallet-analysis.
"""
