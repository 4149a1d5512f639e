"""Allow running as ``python -m callslice``."""

from callslice.presentation.cli import main

raise SystemExit(main())
