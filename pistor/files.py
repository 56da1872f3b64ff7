# --------------------------------------------------------------------
# files.py: Staging of source files into the build output area.
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Tuesday, March 9 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------
import filecmp
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Optional

from ansilog import dim

from .artifacts import Artifact, FileArtifact, PolyArtifact
from .config import Config
from .recipes import Recipe
from .util import badge, uniq_list

if TYPE_CHECKING:
    from .graph import BuildGraph

# --------------------------------------------------------------------
log = Config.get().get_logger("pistor.files")


# --------------------------------------------------------------------
def resolve_patterns(source_root: Path, patterns: Iterable[str]) -> List[Path]:
    """Resolve glob patterns against the source root into a list of
    relative file paths, in pattern order.  Patterns matching nothing
    are skipped."""
    result = []
    for pattern in patterns:
        matches = sorted(p for p in source_root.glob(pattern) if p.is_file())
        if not matches:
            log.debug("Pattern '%s' matched nothing in %s.", pattern, source_root)
        result.extend(p.relative_to(source_root) for p in matches)
    return uniq_list(result)


# --------------------------------------------------------------------
class StagingRecipe(Recipe):
    """Copies files from a source root into a destination directory,
    preserving their relative paths.  Runs as part of every build, but
    only copies files whose content differs."""

    def __init__(self, source_root: Path, destination: Path, files: Iterable[Path]):
        super().__init__()
        self.source_root = source_root
        self.destination = destination
        self.files = list(files)
        self._staged = False

    @property
    def display_info(self) -> str:
        return f"{len(self.files)} file(s) -> {self.destination}"

    @property
    def is_done(self) -> bool:
        return self._staged

    def reset(self):
        super().reset()
        self._staged = False

    @property
    def output(self) -> Artifact:
        return PolyArtifact(FileArtifact(self.destination / f) for f in self.files)

    async def make(self):
        for relpath in self.files:
            src = self.source_root / relpath
            dst = self.destination / relpath
            if dst.exists() and filecmp.cmp(src, dst, shallow=False):
                continue
            dst.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(src, dst)
            log.info(f"{badge(dim('stage'))} {dim(str(relpath))}")
        self._staged = True


# --------------------------------------------------------------------
def stage_files(
    graph: "BuildGraph",
    name: str,
    destination: Path,
    patterns: Iterable[str],
    source_root: Optional[Path] = None,
    origin: str = "graph",
) -> StagingRecipe:
    """Register a step in the graph that stages the files matching the
    given patterns into the destination directory."""
    source_root = Path(source_root or graph.source_dir)
    recipe = StagingRecipe(
        source_root, Path(destination), resolve_patterns(source_root, patterns)
    )
    graph.add_step(name, recipe, origin)
    return recipe
