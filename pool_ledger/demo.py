"""
Demonstration run: one fee deposit, one borrow attempt and one interest
application, printing every entity after each step.
"""

import json
from typing import Callable, Optional

from .errors import LedgerError
from .ledger import Ledger


def _dump(label: str, state: dict) -> str:
    return f"{label}: {json.dumps(state, indent=2)}"


def run_demo(ledger: Optional[Ledger] = None, echo: Callable[[str], None] = print) -> Ledger:
    """Run the demonstration sequence and return the resulting ledger"""
    ledger = ledger or Ledger()
    treasury = ledger.treasury

    alice = ledger.register_user(1, "Alice")  # lender
    bob = ledger.register_user(2, "Bob")      # borrower

    ledger.deposit_with_fee(alice.id, 1000, True)
    echo("After Alice's deposit:")
    echo(_dump("Alice", alice.to_dict()))
    echo(_dump("Treasury", treasury.to_dict()))

    try:
        borrowed = ledger.borrow(bob.id, alice.id, 100)
        echo(f"Bob borrowed {borrowed} from Alice.")
    except LedgerError as e:
        echo(f"Borrow failed: {e}")
    echo("\nAfter borrowing:")
    echo(_dump("Alice", alice.to_dict()))
    echo(_dump("Bob", bob.to_dict()))

    try:
        interest = ledger.apply_interest(alice.id)
        echo(f"Applied {interest} interest to Alice's deposit.")
    except LedgerError as e:
        echo(f"Interest application failed: {e}")
    echo("\n" + _dump("Final Treasury state", treasury.to_dict()))

    return ledger
