# --------------------------------------------------------------------
# descriptors.py: Artifact descriptors, install policies and rules.
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Tuesday, March 9 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from .config import PRIVATE_COMPONENT
from .util import add_prefix, join


# --------------------------------------------------------------------
class ArtifactKind(Enum):
    OBJECTS = "object-collection"
    STATIC = "static-library"
    SHARED = "shared-library"
    EXECUTABLE = "executable"


# --------------------------------------------------------------------
class DocKind(Enum):
    RAW = "raw-copy"
    SITE = "rendered-site"
    DOCUMENT = "rendered-document"


# --------------------------------------------------------------------
@dataclass(frozen=True)
class Installable:
    component: str

    @property
    def installable(self) -> bool:
        return True


# --------------------------------------------------------------------
@dataclass(frozen=True)
class Internal:
    """ Built, but never installed. """

    @property
    def component(self) -> str:
        return PRIVATE_COMPONENT

    @property
    def installable(self) -> bool:
        return False


# --------------------------------------------------------------------
InstallPolicy = Union[Installable, Internal]


def policy_for(component: Optional[str]) -> Optional[InstallPolicy]:
    if component is None:
        return None
    if component == PRIVATE_COMPONENT:
        return Internal()
    return Installable(component)


# --------------------------------------------------------------------
@dataclass(frozen=True)
class ArtifactDescriptor:
    name: str
    kind: ArtifactKind
    sources: Tuple[str, ...]
    includes: Tuple[str, ...] = ()
    flags: Tuple[str, ...] = ()
    link_libraries: Tuple[str, ...] = ()
    dependencies: Tuple[str, ...] = ()
    output_name: Optional[str] = None
    policy: Optional[InstallPolicy] = None
    destination: Optional[str] = None
    version: Optional[str] = None

    def __post_init__(self):
        if self.output_name is None:
            object.__setattr__(self, "output_name", self.name)

    @property
    def component(self) -> Optional[str]:
        return self.policy.component if self.policy else None

    @property
    def output_file(self) -> Optional[str]:
        if self.kind == ArtifactKind.STATIC:
            return f"lib{self.output_name}.a"
        if self.kind == ArtifactKind.SHARED:
            return f"lib{self.output_name}.so"
        if self.kind == ArtifactKind.EXECUTABLE:
            return self.output_name
        return None

    @property
    def soname(self) -> Optional[str]:
        if self.kind == ArtifactKind.SHARED and self.version:
            return f"{self.output_file}.{self.version}"
        return self.output_file

    @property
    def include_flags(self):
        return add_prefix("-I", self.includes)

    @property
    def link_flags(self):
        return add_prefix("-l", self.link_libraries)

    @property
    def compile_line(self) -> str:
        """The compile flags for this artifact as a single string, as the
        toolchain expects them in `CFLAGS`."""
        return join(" ", [*self.flags, *self.include_flags])


# --------------------------------------------------------------------
@dataclass(frozen=True)
class DocArtifact:
    name: str
    kind: DocKind
    sources: Tuple[str, ...] = ()
    source_dir: Optional[Path] = None
    render_options: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
    stylesheet: Optional[str] = None
    destination: Optional[str] = None
    policy: Optional[InstallPolicy] = None
    outputs: Tuple[Path, ...] = ()

    @property
    def dependencies(self) -> Tuple[str, ...]:
        return ()

    @property
    def component(self) -> Optional[str]:
        return self.policy.component if self.policy else None


# --------------------------------------------------------------------
@dataclass(frozen=True)
class InstallRule:
    artifact: str
    subjects: Tuple[Path, ...]
    destination: str
    component: str
