import sys

from expense_tracker.app import main

sys.exit(main())
