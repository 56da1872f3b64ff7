# --------------------------------------------------------------------
# graph.py: The append-only build graph populated by target recipes.
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Tuesday, March 9 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from .config import Config
from .descriptors import ArtifactDescriptor, DocArtifact, InstallRule
from .errors import DuplicateArtifactError, UnresolvedDependencyError
from .recipes import Recipe

# --------------------------------------------------------------------
log = Config.get().get_logger("pistor.graph")

Entity = Union[ArtifactDescriptor, DocArtifact]


# --------------------------------------------------------------------
class BuildGraph:
    """Holds the artifacts, build steps and install rules declared by
    target recipes, in declaration order.  Entries are never replaced
    or removed."""

    def __init__(
        self,
        source_dir: Optional[Path] = None,
        build_dir: Optional[Path] = None,
        distribution: str = "",
    ):
        self.source_dir = Path(source_dir or Path.cwd())
        self.build_dir = Path(build_dir or self.source_dir / "build")
        self.distribution = distribution
        self._entities: Dict[str, Entity] = {}
        self._steps: Dict[str, Recipe] = {}
        self._install_rules: List[InstallRule] = []

    def register(
        self, entity: Entity, recipe: Optional[Recipe] = None, origin: str = "graph"
    ) -> Entity:
        """Add an artifact to the graph, along with the step that builds it
        if the artifact is built by this layer rather than the toolchain."""
        self.check_available(origin, entity.name)
        for dep in entity.dependencies:
            if dep not in self._entities:
                raise UnresolvedDependencyError(origin, entity.name, dep)

        self._entities[entity.name] = entity
        if recipe is not None:
            recipe.name = entity.name
            self._steps[entity.name] = recipe
        log.debug("Registered %s '%s'.", entity.kind.value, entity.name)
        return entity

    def check_available(self, origin: str, *names: str):
        """Artifacts and steps share one namespace.  Recipes check every
        name they will add before changing the graph."""
        for name in names:
            if name in self._entities or name in self._steps:
                raise DuplicateArtifactError(origin, name)

    def add_step(self, name: str, recipe: Recipe, origin: str = "graph") -> Recipe:
        self.check_available(origin, name)
        recipe.name = name
        self._steps[name] = recipe
        return recipe

    def add_install_rule(self, rule: InstallRule) -> InstallRule:
        self._install_rules.append(rule)
        return rule

    def artifact(self, name: str) -> Entity:
        return self._entities[name]

    def step(self, name: str) -> Recipe:
        return self._steps[name]

    @property
    def artifacts(self) -> List[ArtifactDescriptor]:
        return [e for e in self._entities.values() if isinstance(e, ArtifactDescriptor)]

    @property
    def docs(self) -> List[DocArtifact]:
        return [e for e in self._entities.values() if isinstance(e, DocArtifact)]

    @property
    def steps(self) -> Dict[str, Recipe]:
        return dict(self._steps)

    @property
    def install_rules(self) -> List[InstallRule]:
        return list(self._install_rules)

    def install_rules_for(self, name: str) -> List[InstallRule]:
        return [r for r in self._install_rules if r.artifact == name]

    def __contains__(self, name: str) -> bool:
        return name in self._entities

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities.values())

    def __len__(self) -> int:
        return len(self._entities)
