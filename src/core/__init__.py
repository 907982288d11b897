"""
Core domain models, record contracts, and integer primitives.

This module contains the foundational building blocks that are independent
of external systems (stores, dispatchers, etc.).
"""
