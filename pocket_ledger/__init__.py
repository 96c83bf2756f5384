"""
Pocket Ledger - Source Package

A small personal finance ledger for a single local user.
Deposits and payments are appended to a pipe-delimited flat file
and browsed through interactive menus.

DESIGN PRINCIPLES:
1. The file is append-only; nothing is ever rewritten
2. A bad line is skipped and reported, never fatal
3. Sign is the only thing separating a deposit from a payment
4. Reports return data; the shell decides how to print it
"""

__version__ = "1.0.0"
__author__ = "Pocket Ledger Team"
