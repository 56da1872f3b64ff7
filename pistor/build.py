# --------------------------------------------------------------------
# build.py: The build engine, binding recipes to a build graph.
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Wednesday, March 10 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------
import asyncio
import functools
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional

from ansilog import dim, fg
from tree_format import format_tree

from .config import Config
from .docs import document_docs, raw_docs, site_docs
from .errors import BuildError, InvalidTargetError
from .graph import BuildGraph
from .install import install
from .recipes import Recipe
from .targets import TargetRecipe, executable, object_library, shared_library, static_library

# --------------------------------------------------------------------
log = Config.get().get_logger("pistor.build")

RECIPES: List[TargetRecipe] = [
    object_library,
    static_library,
    shared_library,
    executable,
    raw_docs,
    site_docs,
    document_docs,
]


# --------------------------------------------------------------------
class Goal(Enum):
    BUILD = 1
    CLEAN = 2


# --------------------------------------------------------------------
class BuildEngine:
    _default: Optional["BuildEngine"] = None

    def __init__(self, graph: Optional[BuildGraph] = None):
        config = Config.get()
        self.graph = graph or BuildGraph(
            Path.cwd(), Path.cwd() / config.build_dir, config.distribution
        )
        for recipe in RECIPES:
            setattr(self, recipe.name, functools.partial(recipe, self.graph))

    @classmethod
    def default(cls) -> "BuildEngine":
        """The engine used by `bake.py` scripts, configured from the
        command line of the script."""
        if cls._default is None:
            Config.get().load()
            cls._default = BuildEngine()
        return cls._default

    def print_targets(self):
        """ Logs the list of artifacts currently declared. """
        for entity in self.graph:
            color = fg.cyan if entity.name in self.graph.steps else dim
            component = entity.component or "-"
            log.info(f"{color(entity.name)} {dim(entity.kind.value)} {component}")

    def print_tree(self):
        """ Prints a tree illustrating the dependencies between artifacts. """
        config = Config.get()
        names = config.targets or [e.name for e in self.graph]
        if not names:
            log.error("There are no artifacts defined.")
            return

        for name in names:
            if name not in self.graph:
                raise InvalidTargetError(name)
            log.info(
                format_tree(
                    name,
                    lambda n: f"{n} {dim(self.graph.artifact(n).kind.value)}",
                    lambda n: list(self.graph.artifact(n).dependencies),
                )
            )

    def compile_targets(self, targets: Iterable[str]) -> List[Recipe]:
        steps = self.graph.steps
        recipes = []
        for target in targets:
            name = target if target in steps else target.replace("-", "_")
            if name not in steps:
                if name in self.graph:
                    raise InvalidTargetError(target) from BuildError(
                        f"'{target}' is built by the toolchain, not by pistor."
                    )
                raise InvalidTargetError(target)
            recipes.append(steps[name])
        return recipes

    def all_targets(self) -> List[Recipe]:
        return [self.graph.step(e.name) for e in self.graph if e.name in self.graph.steps]

    async def resolve(self, recipes: List[Recipe], goal: Goal = Goal.BUILD):
        if goal == Goal.CLEAN:
            await asyncio.gather(*[r.clean(True) for r in recipes])
        else:
            await asyncio.gather(*[r.resolve() for r in recipes])

    def install(self, prefix: Path, components: Optional[Iterable[str]] = None) -> List[Path]:
        return install(self.graph.install_rules, prefix, components)
