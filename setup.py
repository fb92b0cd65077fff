#!/usr/bin/env python3

from __future__ import annotations

import os
import sys
import re
import time
import pathlib

from setuptools import setup, Command
from setuptools.command import build_py


def write(*args):
    dest = sys.stdout
    if args[-1] == sys.stderr:
        dest = args[-1]
        args = args[:-1]
    dest.write(" ".join(args) + "\n")
    dest.flush()


# work out version number
version = re.search(
    r'^__version__\s*=\s*"([^"]+)"', pathlib.Path("linebreak/__init__.py").read_text(encoding="utf8"), re.MULTILINE
).group(1)


# Run test suite
class run_tests(Command):
    description = "Run test suite"

    # 'verbose' is builtin and defaults to 1 (--quiet forces it to 0)
    user_options = [
        ("show-tests", "v", "Show each test being run"),
        ("locals", None, "Show local variables in test failure"),
    ]

    boolean_options = ["show-tests", "locals"]

    def initialize_options(self):
        self.show_tests = 0
        self.locals = False

    def finalize_options(self):
        pass

    def run(self):
        import unittest

        suite = unittest.TestLoader().discover(os.path.join("linebreak", "tests"), top_level_dir=".")
        # verbosity of zero doesn't print anything, one prints a dot
        # per test and two prints each test name
        result = unittest.TextTestRunner(verbosity=self.show_tests + 1, tb_locals=self.locals).run(suite)
        if not result.wasSuccessful():
            sys.exit(1)


class fetch(Command):
    description = "Downloads the Unicode line break data files"
    user_options = [
        ("data", None, "Download LineBreak.txt"),
        ("test", None, "Download LineBreakTest.txt"),
        ("all", None, "Download all data files"),
    ]
    fetch_options = ["data", "test"]
    boolean_options = fetch_options + ["all"]

    def initialize_options(self):
        self.data = False
        self.test = False
        self.all = False

    def finalize_options(self):
        if self.all:
            for i in self.fetch_options:
                setattr(self, i, True)

    def run(self):
        import linebreak.config

        write(f"  Unicode version { linebreak.config.UNICODE_VERSION }")
        linebreak.config.UCD_DIR.mkdir(exist_ok=True)
        downloaded = 0

        for option, url, name in (
            ("data", linebreak.config.DATA_FILE_URL, linebreak.config.DATA_FILE_NAME),
            ("test", linebreak.config.TEST_FILE_URL, linebreak.config.TEST_FILE_NAME),
        ):
            if not getattr(self, option):
                continue
            write(f"  Getting { name }")
            data = self.download(url)
            # catch an error page or wrong version before it is saved
            if not data.startswith(("# " + name.replace(".txt", "-") + linebreak.config.UNICODE_VERSION).encode()):
                write("    Download does not look like", name, "for version", linebreak.config.UNICODE_VERSION, sys.stderr)
                raise ValueError(f"Unexpected contents from { url }")
            dest = linebreak.config.UCD_DIR / name
            dest.write_bytes(data)
            write(f"    Saved { dest } ({ len(data) } bytes)")
            downloaded += 1

        if not downloaded:
            write("You didn't specify any data files to fetch.  Use")
            write("   setup.py fetch --help")
            write("for a list and details")
            raise ValueError("No data files downloaded")

    # download a url
    def download(self, url):
        import urllib.request

        write("    Fetching", url)
        count = 0
        while True:
            try:
                if count:
                    write("        Try #", str(count + 1))
                with urllib.request.urlopen(url) as response:
                    return response.read()
            except OSError as e:
                write("       Error ", str(e))
                time.sleep(3.14 * count)
                count += 1
                if count >= 10:
                    raise


class build_tables(Command):
    description = "Generates linebreak/_tables.py from the Unicode data"
    user_options = [
        ("data-dir=", None, "LineBreak.txt or a directory containing it (default fetched copy, else download)"),
        ("optional", None, "Warn instead of failing if the tables can't be generated"),
    ]
    boolean_options = ["optional"]

    def initialize_options(self):
        self.data_dir = None
        self.optional = False

    def finalize_options(self):
        pass

    def run(self):
        import linebreak.build
        import linebreak.config

        data_dir = self.data_dir or linebreak.config.data_file()
        args = ["--data-dir", str(data_dir)] if data_dir else []
        if linebreak.build.main(args):
            if not self.optional:
                sys.exit(1)
            write("Line break tables were not generated.  Run 'setup.py fetch --data' and", sys.stderr)
            write("build again, or set", linebreak.config.ENV_DATA, "when using the package.", sys.stderr)


# Generate the tables before the package is copied so they are installed
class linebreak_build_py(build_py.build_py):
    def run(self):
        self.distribution.get_command_obj("build_tables").optional = True
        self.run_command("build_tables")
        super().run()


if __name__ == "__main__":
    setup(
        name="linebreak",
        version=version,
        python_requires=">=3.9",
        description="Unicode line break opportunities using a compiled pair table",
        long_description=pathlib.Path("README.rst").read_text(encoding="utf8"),
        long_description_content_type="text/x-rst",
        classifiers=[
            "Development Status :: 4 - Beta",
            "Intended Audience :: Developers",
            "Programming Language :: Python :: 3",
            "Topic :: Text Processing :: General",
        ],
        keywords=["unicode", "line break", "uax14", "text"],
        platforms="any",
        packages=["linebreak", "linebreak.tests"],
        package_data={"linebreak": ["ucd/*.txt"], "linebreak.tests": ["data/*.txt"]},
        entry_points={"console_scripts": ["linebreak=linebreak.__main__:main"]},
        cmdclass={
            "test": run_tests,
            "fetch": fetch,
            "build_tables": build_tables,
            "build_py": linebreak_build_py,
        },
    )
