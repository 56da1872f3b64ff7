# --------------------------------------------------------------------
# bake.py
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Wednesday, March 10 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------
from pistor import (
    build,
    document_docs,
    executable,
    object_library,
    raw_docs,
    shared_library,
    site_docs,
    static_library,
)

# -------------------------------------------------------------------
INCLUDES = ["include", "third_party/include"]

object_library(
    name="mathutil_objs",
    sources=["src/vec.c", "src/mat.c"],
    includes=INCLUDES,
    flags=["-fPIC", "-O2"],
)

static_library(
    name="mathutil",
    sources=["src/vec.c", "src/mat.c"],
    depends=["mathutil_objs"],
    includes=INCLUDES,
)

shared_library(
    "NAME", "mathutil_shared",
    "OUTPUT_NAME", "mathutil",
    "SOURCES", "src/vec.c", "src/mat.c",
    "LINK_LIBS", "m",
)

executable(
    name="mathtool",
    sources=["tools/mathtool.c"],
    includes=INCLUDES,
    link_libs=["m"],
    deplibs=["mathutil"],
)

executable(
    name="bench",
    sources=["bench/bench.c"],
    deplibs=["mathutil"],
    component="private",
)

# -------------------------------------------------------------------
raw_docs(
    name="license",
    sources=["LICENSE", "README.md"],
    destination="share/doc/mathutil",
    component="docs",
)

site_docs(
    name="website",
    source_dir="site",
    destination="share/doc/mathutil",
    component="docs",
    options=["--strict"],
)

document_docs(
    name="manual",
    sources=["manual/*.md"],
    stylesheet="manual/manual.css",
    destination="share/doc/mathutil",
    component="docs",
)

# -------------------------------------------------------------------
build()
