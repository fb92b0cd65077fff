"Test suite - run with ``python -m unittest discover linebreak``"

from __future__ import annotations

import functools
import pathlib

from linebreak.tables import Tables, compile_file

data_dir = pathlib.Path(__file__).parent / "data"

sample_data_file = data_dir / "LineBreak-sample.txt"
"Excerpt of LineBreak.txt with the Unicode 12.1 values of the codepoints the tests use"

sample_test_file = data_dir / "LineBreakTest-sample.txt"


@functools.lru_cache(maxsize=None)
def sample_tables() -> Tables:
    return compile_file(sample_data_file)
