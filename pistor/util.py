# --------------------------------------------------------------------
# util.py: Common utility functions and list transforms.
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Tuesday, March 9 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------
import collections.abc
import os
from pathlib import Path
from typing import Any, Generator, Iterable, List, Set, TypeVar

# --------------------------------------------------------------------
T = TypeVar("T")


# --------------------------------------------------------------------
def join(separator: str, items: Iterable[Any]) -> str:
    return separator.join(str(item) for item in items)


# --------------------------------------------------------------------
def add_prefix(prefix: str, items: Iterable[Any]) -> List[str]:
    """Prefix each item, yielding one token per item.  Use this for flags
    that must stay distinct on the command line, e.g. `-I` includes."""
    return [f"{prefix}{item}" for item in items]


# --------------------------------------------------------------------
def prepend_over(prefix: str, items: Iterable[Any]) -> str:
    """Prefix each item and fuse the result into a single token, for tools
    that expect all values in one argument."""
    return "".join(add_prefix(prefix, items))


# --------------------------------------------------------------------
def add_suffix(suffix: str, items: Iterable[Any]) -> List[str]:
    return [f"{item}{suffix}" for item in items]


# --------------------------------------------------------------------
def relative_to(pivot: Path, path: Path) -> Path:
    try:
        return path.relative_to(pivot)
    except ValueError:
        return path


# --------------------------------------------------------------------
def is_iterable(x: Any) -> bool:
    """Strings, bytes and paths are single values, any other iterable is a
    sequence of values."""
    return isinstance(x, collections.abc.Iterable) and not isinstance(
        x, (str, bytes, os.PathLike)
    )


# --------------------------------------------------------------------
def badge(s: str) -> str:
    return "[ %s ]" % s


# --------------------------------------------------------------------
def decode(b: bytes) -> str:
    try:
        return b.decode("utf-8")
    except UnicodeDecodeError:
        return b.decode("ISO-8859-1")


# --------------------------------------------------------------------
def uniq(it: Iterable[T]) -> Generator[T, None, None]:
    """Filter the given iterable preserving order by removing
    any subsequent items already encountered."""

    visited: Set[T] = set()
    for x in it:
        if x not in visited:
            visited.add(x)
            yield x


# --------------------------------------------------------------------
def uniq_list(it: Iterable[T]) -> List[T]:
    return list(uniq(it))
