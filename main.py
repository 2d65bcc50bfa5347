"""Development entrypoint for the Armory HTTP API and updater."""

from __future__ import annotations

import sys

from armory.cli import main

if __name__ == "__main__":
    sys.exit(main())
