"""
Expense Tracker - Source Package

A personal expense tracker that reports credit-card expenses under the
billing month they are charged in.

DESIGN PRINCIPLES:
1. Malformed input is rejected at the boundary, never inside the stores
2. The stores own their state; no module-level singletons
3. Storage is swappable and failures never lose the session's data
4. Every mutation and swallowed failure is audit-logged
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
