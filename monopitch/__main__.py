"""python -m monopitch"""

import sys

from monopitch.cli import main

if __name__ == "__main__":
    sys.exit(main())
