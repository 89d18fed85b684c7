"""
FinnAI - Source Package

A personal finance dashboard: an in-memory ledger of accounts and
transactions, timeframe-scoped statistics, and AI-generated insights
with a short forecast.

DESIGN PRINCIPLES:
1. The ledger is the single source of truth
2. Derived numbers are recomputed, never patched
3. The AI provider is a black box behind a typed contract
4. Provider failures never reach the user as exceptions
"""

__version__ = "1.0.0"
__author__ = "FinnAI Team"
