"""
Expense Tracker - Source Package

A small expense-tracking screen backed by a local SQLite table.

DESIGN PRINCIPLES:
1. The store is the source of truth; the screen only reflects it
2. Every mutation is written, then everything is reloaded
3. Invalid input never reaches the store
4. Every mutation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
