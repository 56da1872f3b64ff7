# --------------------------------------------------------------------
# errors.py: Exceptions and error management tools.
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Tuesday, March 9 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------
from typing import Iterable


# --------------------------------------------------------------------
class BuildError(Exception):
    pass


# --------------------------------------------------------------------
class ConfigurationError(BuildError):
    """ Raised while the build graph is being declared.  These abort the
    whole configuration, there is never a partially declared graph. """

    def __init__(self, recipe: str, msg: str):
        self.recipe = recipe
        super().__init__(f"{recipe}: {msg}")


# --------------------------------------------------------------------
class MissingParameterError(ConfigurationError):
    def __init__(self, recipe: str, parameters: Iterable[str]):
        self.parameters = list(parameters)
        super().__init__(
            recipe, "missing required parameter(s): %s" % ", ".join(self.parameters)
        )


# --------------------------------------------------------------------
class UnknownParameterError(ConfigurationError):
    def __init__(self, recipe: str, tokens: Iterable[str]):
        self.tokens = list(tokens)
        super().__init__(
            recipe, "unknown parameter(s): %s" % ", ".join(self.tokens)
        )


# --------------------------------------------------------------------
class DuplicateArtifactError(ConfigurationError):
    def __init__(self, recipe: str, name: str):
        self.name = name
        super().__init__(recipe, f"'{name}' is already defined.")


# --------------------------------------------------------------------
class UnresolvedDependencyError(ConfigurationError):
    def __init__(self, recipe: str, name: str, dependency: str):
        self.name = name
        self.dependency = dependency
        super().__init__(
            recipe, f"'{name}' depends on '{dependency}', which is not defined."
        )


# --------------------------------------------------------------------
class InvalidTargetError(Exception):
    def __init__(self, name):
        self.name = name
        super().__init__("'%s' is not a valid target." % name)
