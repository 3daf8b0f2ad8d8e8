"""Script de ejecución (`python -m main` desde `src/`).

Mantiene un entrypoint simple además del script `graph-media`.
"""

from __future__ import annotations

import sys

# Rich tables/panels may print non-ASCII names on cp1252 Windows consoles.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
