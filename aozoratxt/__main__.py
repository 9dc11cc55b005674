"""Module entrypoint for running aozoratxt as ``python -m aozoratxt``."""

from __future__ import annotations

from aozoratxt.cli import main


if __name__ == "__main__":
    main()
