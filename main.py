from __future__ import annotations

import sys

from ascii_mandelbrot.cli import main

if __name__ == "__main__":
    sys.exit(main())
