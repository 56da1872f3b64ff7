# --------------------------------------------------------------------
# recipes.py: Build step base classes and utilities.
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Tuesday, March 9 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------
import asyncio
from typing import Iterable, List, Optional

from ansilog import dim, fg

from .artifacts import Artifact, NullArtifact, PolyArtifact
from .config import Config
from .errors import BuildError
from .util import badge

# --------------------------------------------------------------------
log = Config.get().get_logger("pistor.recipes")


# --------------------------------------------------------------------
def if_not_quiet(f):
    def wrapper(*args, **kwargs):
        config = Config.get()
        if not config.quiet:
            f(*args, **kwargs)

    return wrapper


# --------------------------------------------------------------------
class Recipe:
    """ Represents a repeatable process run by the build engine. """

    def __init__(self, input: Optional[List["Recipe"]] = None):
        self._deps: List["Recipe"] = list(input or [])
        self.name: Optional[str] = None
        self._lock: Optional[asyncio.Lock] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._resolved = False

    @property
    def display_name(self) -> str:
        return self.name or self.__class__.__name__

    @property
    def display_info(self) -> Optional[str]:
        return None

    @property
    def ansi_display_name(self) -> str:
        config = Config.get()
        display_name = str(fg.cyan(self.display_name))
        if config.debug:
            display_name = f"{display_name} ({dim(self.__class__.__name__)})"
        return display_name

    @if_not_quiet
    def log_start(self):
        log.info(f"{badge(self.ansi_display_name)} start")

    def log_error(self, msg, *args):
        log.error(f"{badge(fg.red(self.display_name))} {msg}", *args)

    def log_info(self, msg, *args):
        log.info(f"{badge(dim(self.display_name))} {msg}", *args)

    @if_not_quiet
    def log_action(self):
        if self.display_info:
            log.info(f"{badge(self.ansi_display_name)} {self.display_info}")

    @if_not_quiet
    def log_cleaning(self):
        log.info(f"{badge(fg.yellow(self.display_name))} cleaning")

    @if_not_quiet
    def log_ok(self):
        log.info(f"{badge(fg.green(self.display_name))} ok")

    @property
    def is_done(self) -> bool:
        """Determine if all of the artifacts of this step exist and are up
        to date with its input."""
        log.debug("%s: output=%s, input=%s", self.display_name, self.output, self.input)
        return self.output.exists and self.output.age <= self.input.age

    def assert_is_done(self):
        if not self.is_done:
            raise BuildError(f"{self.display_name} did not complete successfully.")

    async def make(self):
        """ Execute this step in order to create its artifacts, if any. """
        raise NotImplementedError()

    async def resolve_deps(self):
        await asyncio.gather(*(recipe.resolve() for recipe in self.dependencies))
        for recipe in self.dependencies:
            recipe.assert_is_done()

    def _build_lock(self) -> asyncio.Lock:
        """The lock guarding this step within the running build.  A new
        event loop starts a new build."""
        loop = asyncio.get_running_loop()
        if self._lock is None or self._loop is not loop:
            self._lock = asyncio.Lock()
            self._loop = loop
            self.reset()
        return self._lock

    def reset(self):
        self._resolved = False

    async def resolve(self):
        """Execute this step and all its dependencies, if needed.  Each step
        is resolved at most once per build."""
        async with self._build_lock():
            if self._resolved:
                return
            await self.resolve_deps()
            if not self.is_done:
                try:
                    self.log_start()
                    self.log_action()
                    await self.make()
                    self.assert_is_done()
                    self.log_ok()

                except Exception as e:
                    self.log_error(str(e))
                    raise e
            self._resolved = True

    async def clean(self, echo=False):
        """ Clean all of the artifacts this step would make, if any. """
        if not self.output.is_null and self.output.exists:
            if echo:
                self.log_cleaning()
            await self.output.clean()

    @property
    def output(self) -> Artifact:
        return NullArtifact()

    @property
    def input(self) -> Artifact:
        """The artifacts generated by the dependencies of this step."""
        return PolyArtifact(r.output for r in self.dependencies)

    @property
    def dependencies(self) -> List["Recipe"]:
        return self._deps

    def __repr__(self):
        return f"<{self.__class__.__name__} for {self.output}>"


# --------------------------------------------------------------------
class PolyRecipe(Recipe):
    """ Runs a set of steps concurrently. """

    def __init__(self, recipes: Iterable[Recipe]):
        self._recipes = list(recipes)
        super().__init__(self._recipes)

    @property
    def is_done(self) -> bool:
        return all(r.is_done for r in self._recipes)

    @property
    def output(self) -> Artifact:
        return PolyArtifact(r.output for r in self._recipes)

    async def make(self):
        pass

    async def clean(self, echo=False):
        for recipe in self._recipes:
            await recipe.clean(echo)

    def __iter__(self):
        return iter(self._recipes)
