# --------------------------------------------------------------------
# targets.py: Target recipes for objects, libraries and executables.
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Tuesday, March 9 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------
from typing import Any, Optional

from .config import (
    BINARY_DIR,
    DEVEL_COMPONENT,
    LIBRARY_DIR,
    RUNTIME_COMPONENT,
    RUNTIME_SUPPORT_LIBRARY,
    SHARED_LIBRARY_VERSION,
    Config,
)
from .descriptors import ArtifactDescriptor, ArtifactKind, policy_for
from .graph import BuildGraph
from .install import gate
from .schema import ParameterSchema, ParsedArguments

# --------------------------------------------------------------------
log = Config.get().get_logger("pistor.targets")


# --------------------------------------------------------------------
class TargetRecipe:
    """ A schema-validated function registering one artifact in a graph.

    Recipes accept their parameters as keyword arguments, as a flat token
    list of upper-cased keywords followed by their values, or both:

        static_library(graph, name="mathutil", sources=["a.c", "b.c"])
        static_library(graph, "NAME", "mathutil", "SOURCES", "a.c", "b.c")
    """

    name = "recipe"
    schema = ParameterSchema()

    def __call__(self, graph: BuildGraph, *tokens: Any, **kwargs: Any):
        args = self.schema.parse(self.name, tokens, kwargs)
        log.debug("%s(%r)", self.name, args)
        return self.evaluate(graph, args)

    def evaluate(self, graph: BuildGraph, args: ParsedArguments):
        raise NotImplementedError()

    def __repr__(self):
        return f"<{self.__class__.__name__} '{self.name}'>"


# --------------------------------------------------------------------
class ObjectLibrary(TargetRecipe):
    name = "object_library"
    schema = ParameterSchema.of(
        single=["name"],
        multi=["sources", "depends", "flags", "includes"],
        required=["name", "sources"],
    )

    def evaluate(self, graph: BuildGraph, args: ParsedArguments) -> ArtifactDescriptor:
        descriptor = ArtifactDescriptor(
            name=args["name"],
            kind=ArtifactKind.OBJECTS,
            sources=args["sources"],
            includes=args["includes"],
            flags=args["flags"],
            dependencies=args["depends"],
        )
        graph.register(descriptor, origin=self.name)
        return descriptor


# --------------------------------------------------------------------
class StaticLibrary(TargetRecipe):
    name = "static_library"
    kind = ArtifactKind.STATIC
    default_component = DEVEL_COMPONENT
    version: Optional[str] = None
    schema = ParameterSchema.of(
        single=["name", "component", "output_name"],
        multi=["sources", "depends", "flags", "includes", "link_libs"],
        required=["name", "sources"],
    )

    def evaluate(self, graph: BuildGraph, args: ParsedArguments) -> ArtifactDescriptor:
        descriptor = ArtifactDescriptor(
            name=args["name"],
            kind=self.kind,
            sources=args["sources"],
            includes=args["includes"],
            flags=args["flags"],
            link_libraries=args["link_libs"],
            dependencies=args["depends"],
            output_name=args["output_name"],
            policy=policy_for(args["component"] or self.default_component),
            destination=LIBRARY_DIR,
            version=self.version,
        )
        graph.register(descriptor, origin=self.name)
        gate(
            graph,
            descriptor.policy,
            descriptor.name,
            [graph.build_dir / descriptor.output_file],
            descriptor.destination,
        )
        return descriptor


# --------------------------------------------------------------------
class SharedLibrary(StaticLibrary):
    name = "shared_library"
    kind = ArtifactKind.SHARED
    default_component = RUNTIME_COMPONENT
    version = SHARED_LIBRARY_VERSION


# --------------------------------------------------------------------
class Executable(TargetRecipe):
    name = "executable"
    schema = ParameterSchema.of(
        single=["name", "component", "destination"],
        multi=["sources", "depends", "flags", "includes", "link_libs", "deplibs"],
        required=["name", "sources"],
    )

    def evaluate(self, graph: BuildGraph, args: ParsedArguments) -> ArtifactDescriptor:
        link_libraries = [*args["link_libs"], *args["deplibs"]]
        if args["link_libs"]:
            link_libraries.append(RUNTIME_SUPPORT_LIBRARY)

        descriptor = ArtifactDescriptor(
            name=args["name"],
            kind=ArtifactKind.EXECUTABLE,
            sources=args["sources"],
            includes=args["includes"],
            flags=args["flags"],
            link_libraries=tuple(link_libraries),
            dependencies=(*args["depends"], *args["deplibs"]),
            policy=policy_for(args["component"] or RUNTIME_COMPONENT),
            destination=args["destination"] or BINARY_DIR,
        )
        graph.register(descriptor, origin=self.name)
        gate(
            graph,
            descriptor.policy,
            descriptor.name,
            [graph.build_dir / descriptor.output_file],
            descriptor.destination,
        )
        return descriptor


# --------------------------------------------------------------------
object_library = ObjectLibrary()
static_library = StaticLibrary()
shared_library = SharedLibrary()
executable = Executable()
