"""QueryGen CLI entry point.

This module enables running QueryGen as:
    python -m querygen <command>
"""

from querygen.cli import main

if __name__ == "__main__":
    main()
