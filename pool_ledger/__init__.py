"""
Pool Ledger

A single-process accounting ledger: user balances mirrored into a shared
treasury, fee-adjusted deposits and withdrawals, peer-to-peer borrowing and
treasury-wide interest. All amounts are bounded unsigned integers.
"""

__version__ = "1.0.0"
