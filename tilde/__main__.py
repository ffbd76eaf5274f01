"""Tilde CLI entry point.

Allows running via `python -m tilde` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

USAGE = "usage: tilde [FILENAME]"


def configure_logging(level: str, path: Optional[Path] = None) -> None:
    """Send log records to a file; the terminal belongs to the editor."""
    from .settings import default_log_path

    path = path or default_log_path()
    root = logging.getLogger()
    root.setLevel(level)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding='utf-8')
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)


def main(argv: Optional[list[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 1:
        print(USAGE, file=sys.stderr)
        sys.exit(2)

    # Lazy import so a usage error never touches the terminal
    from .editor import Editor
    from .settings import load_settings
    from .terminal import TerminalError

    settings = load_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("tilde")

    try:
        editor = Editor(settings=settings)
        if args:
            editor.load_file(args[0])
        editor.run()
    except (TerminalError, OSError) as e:
        # raw_mode() has already restored the terminal by the time we get here
        logger.error(f"Fatal: {e}")
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
