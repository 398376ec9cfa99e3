"""Entry point for running pollwatch as a module.

Usage:
    python -m pollwatch --dir src --ext py --interval 2
"""

from pollwatch.cli import main

if __name__ == "__main__":
    main()
