"""
Core expression models, operator tables and numeric primitives.

Independent of any running kernel and of SymPy.
"""
