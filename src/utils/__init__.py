"""
Utility modules for Earnings Pulse.

Cross-cutting concerns:
- Rounding: Round-half-up percentage and fixed-precision formatting
- Storage: File I/O helpers for raw documents
"""
