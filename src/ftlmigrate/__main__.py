"""Allow running the migration with ``python -m ftlmigrate``."""

import sys

from ftlmigrate.cli import main

sys.exit(main())
