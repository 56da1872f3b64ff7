# --------------------------------------------------------------------
# artifacts.py: Outputs produced on disk by build steps.
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Tuesday, March 9 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------
import shutil
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Iterable, List

from ansilog import dim

from .config import Config
from .util import badge, relative_to, uniq_list

# --------------------------------------------------------------------
log = Config.get().get_logger("pistor.artifacts")


# --------------------------------------------------------------------
class Artifact:
    """ The reversible system state changed by running a step. """

    @property
    def is_null(self) -> bool:
        return False

    @property
    def exists(self) -> bool:
        raise NotImplementedError()

    @property
    def age(self) -> timedelta:
        raise NotImplementedError()

    async def clean(self):
        raise NotImplementedError()

    def to_params(self) -> List[Any]:
        raise NotImplementedError()


# --------------------------------------------------------------------
class NullArtifact(Artifact):
    @property
    def is_null(self) -> bool:
        return True

    @property
    def exists(self) -> bool:
        return True

    @property
    def age(self) -> timedelta:
        return timedelta.max

    async def clean(self):
        pass

    def to_params(self) -> List[Any]:
        return []

    def __repr__(self):
        return "<NullArtifact>"


# --------------------------------------------------------------------
class FileArtifact(Artifact):
    """ Represents a file or directory output from a step. """

    def __init__(self, path: Path):
        self.path = Path(path)

    @property
    def exists(self) -> bool:
        return self.path.exists()

    @property
    def age(self) -> timedelta:
        if not self.exists:
            return timedelta.max
        return datetime.now() - datetime.fromtimestamp(self.path.stat().st_mtime)

    async def clean(self):
        if self.exists:
            log.info(f"{badge(dim('delete'))} {dim(str(relative_to(Path.cwd(), self.path)))}")
            if self.path.is_dir():
                shutil.rmtree(self.path)
            else:
                self.path.unlink()

    def to_params(self) -> List[Any]:
        return [self.path]

    def __repr__(self):
        return f"<FileArtifact {str(self.path)}>"

    def __str__(self):
        return str(self.path)

    def __eq__(self, other):
        return isinstance(other, FileArtifact) and other.path == self.path

    def __hash__(self) -> int:
        return hash(self.path)


# --------------------------------------------------------------------
class PolyArtifact(Artifact):
    def __init__(self, artifacts: Iterable[Artifact]):
        self.artifacts = uniq_list(a for a in artifacts if not a.is_null)

    @property
    def is_null(self) -> bool:
        return not self.artifacts

    @property
    def exists(self) -> bool:
        return all(a.exists for a in self.artifacts)

    @property
    def age(self) -> timedelta:
        """The age of the youngest artifact."""
        return min((a.age for a in self.artifacts), default=timedelta.max)

    async def clean(self):
        for artifact in self.artifacts:
            await artifact.clean()

    def to_params(self) -> List[Any]:
        return [p for a in self.artifacts for p in a.to_params()]

    def __repr__(self):
        return f"<PolyArtifact {self.artifacts!r}>"
