"""Derived computations over decoded documents (distance, timing)."""
