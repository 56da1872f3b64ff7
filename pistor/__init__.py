# -------------------------------------------------------------------
# Pistor: Declarative artifact recipes for C/C++ projects and docs.
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Tuesday, March 9 2021
#
# Released under a 3-clause BSD license, see LICENSE for more info.
# -------------------------------------------------------------------
from .build import BuildEngine, Goal
from .bake import build
from .descriptors import (
    ArtifactDescriptor,
    ArtifactKind,
    DocArtifact,
    DocKind,
    Installable,
    InstallRule,
    Internal,
    policy_for,
)
from .errors import (
    BuildError,
    ConfigurationError,
    MissingParameterError,
    UnknownParameterError,
)
from .files import stage_files
from .graph import BuildGraph
from .schema import Arity, Parameter, ParameterSchema, ParsedArguments
from .util import add_prefix, add_suffix, join, prepend_over


# -------------------------------------------------------------------
def _on_default_engine(name):
    def wrapper(*args, **kwargs):
        return getattr(BuildEngine.default(), name)(*args, **kwargs)

    wrapper.__name__ = name
    wrapper.__doc__ = f"Declare a `{name}` in the default build graph."
    return wrapper


object_library = _on_default_engine("object_library")
static_library = _on_default_engine("static_library")
shared_library = _on_default_engine("shared_library")
executable = _on_default_engine("executable")
raw_docs = _on_default_engine("raw_docs")
site_docs = _on_default_engine("site_docs")
document_docs = _on_default_engine("document_docs")
