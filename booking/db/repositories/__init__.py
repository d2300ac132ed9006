"""
Per-domain repository modules for database access.

Write helpers commit by default; pass ``commit=False`` to stage changes inside
a caller-managed transaction (the caller then commits or rolls back).
"""
