"""
Builds, caches, and generates the lookup tables

Everything the scanner needs is held in a :class:`Tables`.  They are
built from ``LineBreak.txt`` and the rules, which takes a few seconds,
so :func:`write_module` can save them as Python source that
:func:`load` prefers over rebuilding.
"""

from __future__ import annotations

import dataclasses
import functools
import importlib
import logging
import os
import pathlib
import sys
import time

from types import ModuleType

from . import config
from .compiler import PairTable, compile_rules
from .exceptions import DataError, TablesUnavailableError
from .properties import PropertyTable, build_property_table, extract_version, parse_records
from .rules import DEFAULT_RULES, Rule, parse_rules
from .safepairs import derive_unsafe_pairs

logger = logging.getLogger(__name__)

GENERATED_MODULE_NAME = __package__ + "._tables"


@dataclasses.dataclass(frozen=True)
class Tables:
    "The property lookup, pair table, and unsafe pairs for one Unicode version"

    unicode_version: str
    properties: PropertyTable
    pair_table: PairTable
    unsafe_pairs: frozenset[tuple[int, int]]

    def is_safe_pair(self, first: int, second: int) -> bool:
        "True if the break between the two classes can be decided without earlier context"
        return (first, second) not in self.unsafe_pairs


def compile_tables(source: str, rules: str | list[Rule] = DEFAULT_RULES) -> Tables:
    """Builds :class:`Tables` from ``LineBreak.txt`` content and rules

    :param rules: Rule text, or already parsed rules

    :raises DataError: if the data is for the wrong Unicode version or is malformed
    :raises RuleError: if the rules are wrong
    """
    version = extract_version(source)
    if version != config.UNICODE_VERSION:
        raise DataError(f"LineBreak.txt is for Unicode {version} but {config.UNICODE_VERSION} is required", 1)

    start = time.monotonic()
    properties = build_property_table(parse_records(source))
    pair_table = compile_rules(parse_rules(rules) if isinstance(rules, str) else rules)
    unsafe_pairs = derive_unsafe_pairs(pair_table)
    logger.info(
        "Built Unicode %s tables in %.2f seconds - %d distinct pages, %d uniform pages, %d unsafe pairs",
        version,
        time.monotonic() - start,
        len(properties.pages),
        properties.uniform_pages,
        len(unsafe_pairs),
    )
    return Tables(version, properties, pair_table, unsafe_pairs)


def compile_file(filename: str | os.PathLike, rules: str | list[Rule] = DEFAULT_RULES) -> Tables:
    "Builds :class:`Tables` from a ``LineBreak.txt`` file"
    logger.debug("Reading %s", filename)
    return compile_tables(pathlib.Path(filename).read_text("utf8"), rules)


def from_module(module: ModuleType) -> Tables:
    "Tables previously saved by :func:`write_module`"
    if module.unicode_version != config.UNICODE_VERSION:
        raise DataError(f"{module.__name__} is for Unicode {module.unicode_version} not {config.UNICODE_VERSION}")
    return Tables(
        module.unicode_version,
        PropertyTable(module.page_indices, module.pages),
        PairTable(module.pair_table, module.state_names),
        module.unsafe_pairs,
    )


def _import_generated() -> ModuleType | None:
    try:
        return importlib.import_module(GENERATED_MODULE_NAME)
    except ModuleNotFoundError as exc:
        if exc.name != GENERATED_MODULE_NAME:
            raise
        return None


@functools.lru_cache(maxsize=None)
def load(data_file: str | os.PathLike | None = None) -> Tables:
    """Returns the tables, building them if necessary

    Sources are tried in this order:

    * ``data_file`` if supplied (a ``LineBreak.txt`` or directory containing it)
    * The file or directory named by the ``LINEBREAK_DATA`` environment variable
    * The generated module written by ``python -m linebreak.build``
    * ``LineBreak.txt`` in the package ``ucd`` directory (from ``setup.py fetch``)

    Results are cached.  Call ``load.cache_clear()`` to discard them.

    :raises TablesUnavailableError: if none of those exist
    """
    if data_file is None and not os.environ.get(config.ENV_DATA):
        module = _import_generated()
        if module is not None:
            logger.debug("Using tables from %s", module.__name__)
            return from_module(module)

    path = config.data_file(data_file)
    if path is None:
        raise TablesUnavailableError(
            f"No generated tables and no {config.DATA_FILE_NAME}.  Set {config.ENV_DATA}, "
            "run 'python setup.py fetch', or run 'python -m linebreak.build'"
        )
    return compile_file(path)


def _bytes_lines(items: tuple[bytes, ...]) -> list[str]:
    return [f"    {item!r}," for item in items]


def _int_lines(items, per_line: int = 16) -> list[str]:
    items = list(items)
    return ["    " + ", ".join(str(v) for v in items[i : i + per_line]) + "," for i in range(0, len(items), per_line)]


def generate_module(tables: Tables, generator: str | None = None) -> str:
    "Returns Python source holding the tables, for :func:`from_module`"
    if generator is None:
        generator = os.path.basename(sys.argv[0]) or __name__

    res = [f"# Generated by {generator} - Do not edit", ""]
    res.append(f"unicode_version = {tables.unicode_version!r}")
    res.append("")
    res.append("page_indices = (")
    res.extend(_int_lines(tables.properties.page_indices))
    res.append(")")
    res.append("")
    res.append("pages = (")
    res.extend(_bytes_lines(tables.properties.pages))
    res.append(")")
    res.append("")
    res.append("state_names = (")
    res.extend(f"    {name!r}," for name in tables.pair_table.names)
    res.append(")")
    res.append("")
    res.append("pair_table = (")
    res.extend(_bytes_lines(tables.pair_table.rows))
    res.append(")")
    res.append("")
    res.append("unsafe_pairs = frozenset(")
    res.append("    (")
    res.extend("    " + line for line in _int_lines((f"({a}, {b})" for a, b in sorted(tables.unsafe_pairs)), 8))
    res.append("    )")
    res.append(")")
    res.append("")
    return "\n".join(res)


def replace_if_different(filename: str | os.PathLike, contents: str) -> bool:
    "Writes contents if the file doesn't exist or differs, returning True if it was written"
    path = pathlib.Path(filename)
    if path.exists() and path.read_text("utf8") == contents:
        logger.info("%s is up to date", path)
        return False
    logger.info("%s %s", "Updating" if path.exists() else "Creating", path)
    path.write_text(contents, "utf8")
    return True


def write_module(
    tables: Tables, filename: str | os.PathLike = config.GENERATED_MODULE, generator: str | None = None
) -> bool:
    "Saves tables as a Python module, only touching the file if the contents change"
    return replace_if_different(filename, generate_module(tables, generator))
