"""
Account Ledger - Source Package

A single-account bookkeeping core: running balance, validated
deposits/transfers/bill payments, and a month-grouped history.

DESIGN PRINCIPLES:
1. Validate before mutating
2. Fail early, fail visibly
3. A rejected transaction changes nothing
4. Every mutation is persisted and audited
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Account Ledger Team"
