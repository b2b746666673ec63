"""
Core number model, error taxonomy, call context and contracts.

This module contains the foundational building blocks shared by the
converters, arithmetic primitives and register algorithms.
"""
