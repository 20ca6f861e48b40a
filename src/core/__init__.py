"""
Core domain models, mathematical primitives, and invariants.

This module contains the foundational building blocks of the generator:
fixed-width modular arithmetic, the deterministic primality test and
the configuration models.
"""
