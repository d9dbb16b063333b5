"""Allow running the command line with ``python -m svg_sprite_store``."""

import sys

from svg_sprite_store.cli import main

if __name__ == "__main__":
    sys.exit(main())
