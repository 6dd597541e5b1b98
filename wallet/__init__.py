"""
Wallet - Source Package

A small personal-wallet ledger: accounts keyed by phone number,
deposits, payments, refunds and saved favorite payments.

DESIGN PRINCIPLES:
1. Balances never go negative
2. Fail early, fail visibly
3. A refused operation changes nothing
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Wallet Team"
