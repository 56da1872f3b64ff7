# --------------------------------------------------------------------
# shell.py: Build steps that invoke external tools.
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Tuesday, March 9 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------
import asyncio
import os
import shlex
from pathlib import Path
from typing import Any, Iterable, List, Optional, Set, Union

from ansilog import fg

from .artifacts import Artifact, FileArtifact, NullArtifact, PolyArtifact
from .config import Config
from .errors import BuildError
from .params import EnvironmentDict, digest_env, digest_param, digest_param_map
from .recipes import Recipe
from .util import decode

# --------------------------------------------------------------------
log = Config.get().get_logger(__name__)

PathLike = Union[str, Path]


# -------------------------------------------------------------------
class ShellRecipe(Recipe):
    """Runs a shell command producing a single output file.

    The command may refer to `{input}` and `{output}`, which are replaced
    with the shell-escaped input files and output file relative to `cwd`.
    The output file is the completion marker: the step is up to date when
    it is younger than every input."""

    _limiter: Optional[asyncio.BoundedSemaphore] = None
    _limiter_loop: Optional[asyncio.AbstractEventLoop] = None

    def __init__(
        self,
        cmd: str,
        cwd: Optional[PathLike] = None,
        env: Optional[EnvironmentDict] = None,
        input: Iterable[PathLike] = (),
        output: Optional[PathLike] = None,
        requires: Iterable[Recipe] = (),
        success_codes: Set[int] = {0},
    ):
        super().__init__(list(requires))
        self._cmd = cmd
        self._cwd = Path(cwd or Path.cwd())
        self._env = env or {}
        self._inputs = [FileArtifact(self._cwd / p) for p in input]
        self._output = FileArtifact(self._cwd / output) if output else NullArtifact()
        self._success_codes = success_codes
        self.returncode: Optional[int] = None
        self.stdout: List[str] = []
        self.stderr: List[str] = []

    @classmethod
    def limiter(cls) -> asyncio.BoundedSemaphore:
        """Bounds the number of concurrent sub shells within the running
        event loop to `--max`."""
        loop = asyncio.get_running_loop()
        if cls._limiter is None or cls._limiter_loop is not loop:
            cls._limiter = asyncio.BoundedSemaphore(Config.get().max_shells)
            cls._limiter_loop = loop
        return cls._limiter

    @property
    def cmd(self) -> str:
        input_param = shlex.join(digest_param(self._inputs, self._cwd))
        output_param = shlex.join(digest_param(self._output, self._cwd))
        return self._cmd.replace("{input}", input_param).replace(
            "{output}", output_param
        )

    @property
    def env(self) -> EnvironmentDict:
        return dict(self._env)

    @property
    def display_info(self) -> str:
        args = shlex.split(self.cmd)
        return f"{fg.magenta(args[0])} {' '.join(args[1:])}"

    @property
    def is_done(self) -> bool:
        if self._output.is_null:
            return self.returncode in self._success_codes
        return Recipe.is_done.fget(self)

    @property
    def output(self) -> Artifact:
        return self._output

    @property
    def input(self) -> Artifact:
        return PolyArtifact([Recipe.input.fget(self), *self._inputs])

    async def make(self):
        config = Config.get()

        async with self.limiter():
            proc = await asyncio.create_subprocess_shell(
                self.cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self._cwd,
                env=digest_env({**os.environ, **self._env}),
            )
            stdout, stderr = await proc.communicate()

        self.returncode = proc.returncode
        self.stdout = decode(stdout).splitlines()
        self.stderr = decode(stderr).splitlines()

        if self.returncode not in self._success_codes:
            for line in self.stderr:
                self.log_error(line)
            raise BuildError("Command has failed (returncode: %d)" % self.returncode)

        if config.verbose:
            for line in self.stdout:
                self.log_info(line)
            for line in self.stderr:
                self.log_info(line)


# -------------------------------------------------------------------
class ShellFactory:
    """Creates ShellRecipes, interpolating keyword parameters into the
    command as shell-escaped strings."""

    def __init__(self, env: Optional[EnvironmentDict] = None):
        self._env: EnvironmentDict = {**(env or {})}

    def env(self, **kwargs) -> "ShellFactory":
        return ShellFactory({**self._env, **kwargs})

    def __call__(
        self,
        cmd: str,
        cwd: Optional[PathLike] = None,
        env: Optional[EnvironmentDict] = None,
        input: Iterable[PathLike] = (),
        output: Optional[PathLike] = None,
        requires: Iterable[Recipe] = (),
        **kwargs: Any,
    ) -> ShellRecipe:
        params = digest_param_map(kwargs)
        params.update(input="{input}", output="{output}")
        return ShellRecipe(
            cmd=cmd.format(**params),
            cwd=cwd,
            env={**self._env, **(env or {})},
            input=input,
            output=output,
            requires=requires,
        )


# --------------------------------------------------------------------
sh = ShellFactory()
