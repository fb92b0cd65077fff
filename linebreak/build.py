"""
Generates the ``_tables`` module so importing doesn't need ``LineBreak.txt``

    python -m linebreak.build [--data-dir DIR] [out_file]
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
import urllib.request

from . import config
from .exceptions import LineBreakError
from .tables import compile_tables, write_module

logger = logging.getLogger(__name__)


def get_source(data_dir: str | None) -> str:
    "Reads LineBreak.txt from data_dir, or downloads it when data_dir is None"
    if data_dir:
        path = config.data_file(data_dir)
        if not path.exists():
            raise FileNotFoundError(f"Failed to find {config.DATA_FILE_NAME} in {data_dir}")
        logger.info("Reading %s", path)
        return path.read_text("utf8")
    logger.info("Reading %s", config.DATA_FILE_URL)
    return urllib.request.urlopen(config.DATA_FILE_URL).read().decode("utf8")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="python -m linebreak.build", description="Generate line break tables")
    p.add_argument(
        "--data-dir",
        help=f"Directory containing {config.DATA_FILE_NAME}, or the file itself.  If not supplied "
        f"it is read from {config.UCD_URL}",
    )
    p.add_argument("-q", "--quiet", action="store_true", help="Only show errors")
    p.add_argument(
        "out_file",
        nargs="?",
        default=str(config.GENERATED_MODULE),
        help="Python file to write [%(default)s]",
    )
    options = p.parse_args(argv)

    logging.basicConfig(level=logging.ERROR if options.quiet else logging.INFO, format="%(message)s")

    assert options.out_file.endswith(".py")

    try:
        tables = compile_tables(get_source(options.data_dir))
        write_module(tables, pathlib.Path(options.out_file), generator=p.prog)
    except (LineBreakError, OSError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
