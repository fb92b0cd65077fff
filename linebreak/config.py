"""Where Unicode data comes from

The tables are pinned to one Unicode version.  Data files for that
version are found via environment variables, the ``ucd`` directory
inside the package (where ``setup.py fetch`` puts them), or
downloaded from :data:`UCD_URL`.
"""

from __future__ import annotations

import os
import pathlib

UNICODE_VERSION = "12.1"
"The `Unicode version <https://www.unicode.org/versions/enumeratedversions.html>`__ the rules and tables implement"

UCD_URL = "https://www.unicode.org/Public/12.1.0/ucd/"
"Base location of the Unicode Character Database for :data:`UNICODE_VERSION`"

DATA_FILE_NAME = "LineBreak.txt"
TEST_FILE_NAME = "LineBreakTest.txt"

# relative to UCD_URL
DATA_FILE_URL = UCD_URL + DATA_FILE_NAME
TEST_FILE_URL = UCD_URL + "auxiliary/" + TEST_FILE_NAME

ENV_DATA = "LINEBREAK_DATA"
"Environment variable naming ``LineBreak.txt`` or a directory containing it"

ENV_TEST_DATA = "LINEBREAK_TEST_DATA"
"Environment variable naming ``LineBreakTest.txt`` or a directory containing it"

PACKAGE_DIR = pathlib.Path(__file__).parent

UCD_DIR = PACKAGE_DIR / "ucd"
"Fetched data files live here"

GENERATED_MODULE = PACKAGE_DIR / "_tables.py"


def _resolve(location: str | os.PathLike, name: str) -> pathlib.Path:
    path = pathlib.Path(location)
    if path.is_dir():
        # directories may hold the UCD layout with an auxiliary subdirectory
        for candidate in (path / name, path / "auxiliary" / name):
            if candidate.exists():
                return candidate
        return path / name
    return path


def data_file(location: str | os.PathLike | None = None) -> pathlib.Path | None:
    """Returns the ``LineBreak.txt`` to build from, or None if there isn't one

    :param location: file or directory that overrides the environment and package
       locations.  It is returned even if it doesn't exist so the caller gets a
       useful error when reading it.
    """
    if location is not None:
        return _resolve(location, DATA_FILE_NAME)
    if os.environ.get(ENV_DATA):
        return _resolve(os.environ[ENV_DATA], DATA_FILE_NAME)
    fetched = UCD_DIR / DATA_FILE_NAME
    return fetched if fetched.exists() else None


def conformance_file() -> pathlib.Path | None:
    "Returns the ``LineBreakTest.txt`` conformance file if one is available"
    candidates = []
    if os.environ.get(ENV_TEST_DATA):
        candidates.append(_resolve(os.environ[ENV_TEST_DATA], TEST_FILE_NAME))
    candidates.append(UCD_DIR / TEST_FILE_NAME)
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None
