# --------------------------------------------------------------------
# config.py: Pistor configuration options.
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Tuesday, March 9 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------
import argparse
import logging
import multiprocessing
import os
from pathlib import Path
from typing import Optional

import ansilog

# --------------------------------------------------------------------
LIBRARY_DIR = "lib64"
BINARY_DIR = "bin"
SHARED_LIBRARY_VERSION = "1.7"
RUNTIME_SUPPORT_LIBRARY = "stdc++"

PRIVATE_COMPONENT = "private"
DEVEL_COMPONENT = "devel"
RUNTIME_COMPONENT = "runtime"

# Distributions whose glibc only knows the lowercase locale alias.
LEGACY_DISTRIBUTIONS = ("el6", "el7")
LEGACY_LOCALE = "en_US.utf8"
DEFAULT_LOCALE = "en_US.UTF-8"

SITE_DEFINITION_FILE = "mkdocs.yml"
SITE_PAGES_DIR = "docs"
SITE_OUTPUT_DIR = "site"
SITE_MARKER = "index.html"

PANDOC_COMMON_FLAGS = ("--toc", "--standalone", "--from=markdown+smart")
PANDOC_PDF_GEOMETRY = ("-V", "geometry:margin=1in")

# --------------------------------------------------------------------
HELP = """
# Pistor: Declarative artifact recipes for C/C++ projects and their docs.
## Usage: `pistor [OPTION]... [TARGET]...`
Evaluate the recipes declared in `bake.py` and run the given (or all)
documentation and staging steps.

## Modes
- `-l, --list`: List the artifacts declared in `bake.py`.
- `--tree`: Print a tree illustrating the dependencies between artifacts.
- `-i, --install`: Install every artifact with an install rule under the
  prefix given by `--prefix` (default: `{config.prefix}`).

## Options
- `-c, --clean`: Clean the outputs of the given (or all) steps.
- `--component`: Only install rules with the given component tag.
  May be given more than once.
- `--dist`: The distribution identifier used to select the documentation
  locale.  Defaults to the `PISTOR_DIST` environment variable.
- `-B, --build-dir`: The build output area (default: `{config.build_dir}`).
- `-v, --verbose`: Print the output of external renderers.
- `-q, --quiet`: Print nothing during builds, unless something goes wrong.
- `-m, --max`: Specifies the maximum number of simultaneously running
  sub shells.  Defaults to the number of CPU cores on the system
  ({config.cpu_cores}).
- `-D, --debug`: Print copious amounts of diagnostic info, including stack
  traces for configuration and build errors.  Can also be enabled by
  setting the `PISTOR_DEBUG` environment variable.
""".strip()


# --------------------------------------------------------------------
class Config:
    """ Defines the command line parameters and other configuration options."""

    _instance: Optional["Config"] = None

    def __init__(self):
        self.targets = []
        self.clean = False
        self.help = False
        self.verbose = False
        self.quiet = False
        self.print_tree = False
        self.list_targets = False
        self.install = False
        self.prefix = Path("/usr")
        self.components = None
        self.debug = "PISTOR_DEBUG" in os.environ
        self.distribution = os.environ.get("PISTOR_DIST", "")
        self.build_dir = Path(os.environ.get("PISTOR_BUILD_DIR", "build"))
        self.mkdocs = os.environ.get("PISTOR_MKDOCS", "mkdocs")
        self.pandoc = os.environ.get("PISTOR_PANDOC", "pandoc")
        self.cpu_cores = multiprocessing.cpu_count()
        self.max_shells = self.cpu_cores
        self.loaded = False

    def print_help(self):
        self.get_logger("pistor.config").info(HELP.format(config=self))

    def get_logger(self, name: str) -> logging.Logger:
        logger = ansilog.getLogger(name)
        if self.debug:
            ansilog.handler.setLevel(logging.DEBUG)
            logger.setLevel(logging.DEBUG)
        else:
            ansilog.handler.setLevel(logging.INFO)
            logger.setLevel(logging.INFO)
        return logger

    @classmethod
    def get_parser(cls, desc) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description=desc, add_help=False)
        parser.add_argument("targets", nargs="*", default=None)
        parser.add_argument("--help", "-h", dest="help", action="store_true")
        parser.add_argument("--clean", "-c", dest="clean", action="store_true")
        parser.add_argument("--verbose", "-v", dest="verbose", action="store_true")
        parser.add_argument("--quiet", "-q", dest="quiet", action="store_true")
        parser.add_argument("--tree", dest="print_tree", action="store_true")
        parser.add_argument("--list", "-l", dest="list_targets", action="store_true")
        parser.add_argument("--install", "-i", dest="install", action="store_true")
        parser.add_argument("--prefix", dest="prefix", type=Path)
        parser.add_argument("--component", dest="components", action="append")
        parser.add_argument("--dist", dest="distribution")
        parser.add_argument("--build-dir", "-B", dest="build_dir", type=Path)
        parser.add_argument("--debug", "-D", dest="debug", action="store_true")
        parser.add_argument("--max", "-m", dest="max_shells", type=int)
        return parser

    @classmethod
    def get(cls) -> "Config":
        if cls._instance is None:
            cls._instance = Config()
        return cls._instance

    def load(self, argv=None, desc="Build parameters") -> "Config":
        """Apply the command line to this config.  The process arguments
        are only parsed once."""
        if argv is None and self.loaded:
            return self
        parser = self.get_parser(desc)
        parser.parse_args(argv, namespace=self)
        self.loaded = argv is None
        return self
