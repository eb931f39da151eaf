"""Allow ``python -m hired``."""

from __future__ import annotations

from hired.cli.main import main

if __name__ == "__main__":
    main()
