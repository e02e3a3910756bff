"""
Core domain models and calendar primitives.

This module contains the foundational building blocks that are independent
of the expression grammar: value objects, settings and calendar arithmetic.
"""
