# --------------------------------------------------------------------
# bake.py: A helper script for running `bake.py` files.
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Wednesday, March 10 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------
import asyncio
import subprocess
import sys
from pathlib import Path
from typing import Iterable, Optional

from ansilog import fg

from .build import BuildEngine, Goal
from .config import Config

log = Config.get().get_logger("pistor.bake")


# --------------------------------------------------------------------
def build(default: Optional[Iterable[str]] = None, engine: Optional[BuildEngine] = None):
    """ This function runs the steps declared by the recipes.

    It is intended to be called at the end of `bake.py` scripts, after
    every recipe has been declared.

    If `default` is provided, those steps are built when no other targets
    are specified on the command line, otherwise every step is built."""

    config = Config.get().load()
    try:
        if engine is None:
            engine = BuildEngine.default()

        if config.print_tree:
            engine.print_tree()
            return

        if config.list_targets:
            engine.print_targets()
            return

        if config.install:
            engine.install(config.prefix, config.components)
            log.info(fg.green("OK"))
            return

        targets = config.targets or list(default or [])
        if targets:
            recipes = engine.compile_targets(targets)
        else:
            recipes = engine.all_targets()

        goal = Goal.CLEAN if config.clean else Goal.BUILD
        asyncio.run(engine.resolve(recipes, goal))
        log.info(fg.green("OK"))

    except Exception as e:
        log.error(e)
        if config.debug:
            log.exception("Exception details >>>")
        log.info(fg.red("FAIL"))
        sys.exit(1)


# --------------------------------------------------------------------
def main():
    config = Config.get().load()

    if config.help:
        config.print_help()
        return

    if Path("bake.py").exists():
        sys.exit(subprocess.call([sys.executable, "bake.py", *sys.argv[1:]]))
    else:
        log.error("There is no 'bake.py' in the current directory.")
        sys.exit(1)


# --------------------------------------------------------------------
if __name__ == "__main__":
    main()
