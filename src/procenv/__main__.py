"""Allow ``python -m procenv``."""

import sys

from procenv.app import main

if __name__ == "__main__":
    sys.exit(main())
