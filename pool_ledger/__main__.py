#!/usr/bin/env python3
"""Main entry point for the Pool Ledger demonstration"""

from pool_ledger.config import get_config
from pool_ledger.demo import run_demo
from pool_ledger.logging_config import setup_logging


def main():
    """Configure logging and run the demonstration"""
    config = get_config()
    setup_logging(config.log_level, log_format=config.log_format, log_file=config.log_file)
    run_demo()


if __name__ == "__main__":
    main()
