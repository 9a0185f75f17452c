"""Development entry point (without an editable install).

Runs the CLI with `python main.py ...`: the package lives under `src/`, so
it is put on sys.path first.
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    src = Path(__file__).resolve().parent / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))

    from athame.cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
