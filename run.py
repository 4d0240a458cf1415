"""
Expense Tracker Entry Point
Единая точка входа (main)
"""

import sys

from expense_tracker.app import main


if __name__ == "__main__":
    sys.exit(main())
