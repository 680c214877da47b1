"""
fintrack - Source Package

A personal finance tracker for the command line: transactions,
categories, monthly summaries and a monthly spending limit, kept in a
local JSON file.

DESIGN PRINCIPLES:
1. The file on disk always matches what the program holds in memory
2. Fail early, fail visibly (a broken ledger file stops the run)
3. Deleting a category never deletes transactions
4. Every change is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "fintrack Team"
