# --------------------------------------------------------------------
# install.py: The install gate and install rule execution.
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Tuesday, March 9 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Optional

from ansilog import dim, fg

from .config import Config
from .descriptors import InstallPolicy, InstallRule
from .errors import BuildError
from .util import badge

if TYPE_CHECKING:
    from .graph import BuildGraph

# --------------------------------------------------------------------
log = Config.get().get_logger("pistor.install")


# --------------------------------------------------------------------
def gate(
    graph: "BuildGraph",
    policy: InstallPolicy,
    name: str,
    subjects: Iterable[Path],
    destination: str,
) -> Optional[InstallRule]:
    """Emit exactly one install rule for the named artifact, unless its
    policy marks it as internal to the build."""
    if not policy.installable:
        log.debug("'%s' is private, no install rule.", name)
        return None
    return graph.add_install_rule(
        InstallRule(name, tuple(subjects), destination, policy.component)
    )


# --------------------------------------------------------------------
def install(
    rules: Iterable[InstallRule],
    prefix: Path,
    components: Optional[Iterable[str]] = None,
) -> List[Path]:
    """Copy the subjects of each install rule under the prefix.  Files land
    in `prefix/destination`, directories are merged into
    `prefix/destination/<name>`.  Returns the installed paths."""
    selected = set(components) if components else None
    installed = []

    for rule in rules:
        if selected is not None and rule.component not in selected:
            continue
        target_dir = Path(prefix) / rule.destination
        for subject in rule.subjects:
            if not subject.exists():
                raise BuildError(
                    f"Can't install '{rule.artifact}', {subject} has not been built."
                )
            target = target_dir / subject.name
            target_dir.mkdir(parents=True, exist_ok=True)
            if subject.is_dir():
                shutil.copytree(subject, target, dirs_exist_ok=True)
            else:
                shutil.copy2(subject, target)
            log.info(f"{badge(fg.green(rule.component))} {dim(str(target))}")
            installed.append(target)

    return installed
