"""
stfjson entry point

Run with: python main.py < export.stf > export.json
Or after install: stfjson export.stf
"""

import sys

from stfjson.cli import main

if __name__ == "__main__":
    sys.exit(main())
