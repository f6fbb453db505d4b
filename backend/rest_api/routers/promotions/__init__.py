"""
Promo code routers - /api/promo-codes/*
"""

from .routes import router

__all__ = ["router"]
