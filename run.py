#!/usr/bin/env python3
"""
Pool Ledger Entry Point

Runs the demonstration sequence against a fresh ledger.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from pool_ledger.__main__ import main


if __name__ == "__main__":
    main()
