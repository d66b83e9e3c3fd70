"""
Infrastructure repositories module.
Contains the Supabase implementation of the finance read interfaces.
"""

from .finance_repository import SupabaseFinanceRepository

__all__ = [
    "SupabaseFinanceRepository"
]
