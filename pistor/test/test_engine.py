# --------------------------------------------------------------------
# test_engine.py
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Wednesday, March 10 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------

import asyncio
import os
import stat
import tempfile
import unittest
from pathlib import Path

from pistor.build import BuildEngine, Goal
from pistor.config import Config
from pistor.errors import BuildError, InvalidTargetError
from pistor.files import stage_files
from pistor.graph import BuildGraph
from pistor.shell import sh

FAKE_PANDOC = """#!/bin/sh
while [ $# -gt 0 ]; do
    if [ "$1" = "-o" ]; then
        shift
        echo "rendered" > "$1"
    fi
    shift
done
"""

FAKE_MKDOCS = """#!/bin/sh
mkdir -p "$3"
echo "$LC_ALL" > "$3/index.html"
"""


# --------------------------------------------------------------------
class EngineTestCase(unittest.TestCase):
    def setUp(self):
        self.tempdir = tempfile.TemporaryDirectory()
        self.root = Path(self.tempdir.name)
        self.engine = BuildEngine(BuildGraph(self.root, self.root / "build"))

    def tearDown(self):
        self.tempdir.cleanup()

    def write(self, relpath, content="# Title\n"):
        path = self.root / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    def script(self, name, content):
        path = self.write(f"tools/{name}", content)
        path.chmod(path.stat().st_mode | stat.S_IXUSR)
        return str(path)

    def run_steps(self, names, goal=Goal.BUILD):
        recipes = self.engine.compile_targets(names)
        asyncio.run(self.engine.resolve(recipes, goal))


# --------------------------------------------------------------------
class StagingTests(EngineTestCase):
    def test_stage_files(self):
        self.write("src/a.txt", "alpha")
        self.write("src/sub/b.txt", "beta")
        self.write("src/c.bin", "gamma")

        stage_files(
            self.engine.graph,
            "stage",
            self.root / "out",
            ["src/*.txt", "src/**/*.txt", "nothing/*.md"],
        )
        self.run_steps(["stage"])

        self.assertEqual((self.root / "out/src/a.txt").read_text(), "alpha")
        self.assertEqual((self.root / "out/src/sub/b.txt").read_text(), "beta")
        self.assertFalse((self.root / "out/src/c.bin").exists())

    def test_stage_skips_identical_content(self):
        self.write("a.txt", "alpha")
        staged = self.write("out/a.txt", "alpha")
        os.utime(staged, (0, 0))

        stage_files(self.engine.graph, "stage", self.root / "out", ["a.txt"])
        self.run_steps(["stage"])
        self.assertEqual(staged.stat().st_mtime, 0)

    def test_shell_steps_have_no_stdin(self):
        self.engine.graph.add_step(
            "drain", sh("cat > {output}", cwd=self.root, output="drained.txt")
        )
        self.run_steps(["drain"])
        self.assertEqual((self.root / "drained.txt").read_text(), "")

    def test_stage_recopies_changed_content(self):
        self.write("a.txt", "new")
        staged = self.write("out/a.txt", "old")

        stage_files(self.engine.graph, "stage", self.root / "out", ["a.txt"])
        self.run_steps(["stage"])
        self.assertEqual(staged.read_text(), "new")


# --------------------------------------------------------------------
class PipelineTests(EngineTestCase):
    def setUp(self):
        super().setUp()
        config = Config.get()
        self.saved = (config.pandoc, config.mkdocs, config.quiet)
        config.pandoc = self.script("pandoc", FAKE_PANDOC)
        config.mkdocs = self.script("mkdocs", FAKE_MKDOCS)
        config.quiet = True

    def tearDown(self):
        config = Config.get()
        config.pandoc, config.mkdocs, config.quiet = self.saved
        super().tearDown()

    def test_document_pipeline(self):
        self.write("guide/intro.md")
        doc = self.engine.document_docs(
            name="guide",
            sources=["guide/*.md"],
            destination="share/doc/guide",
            component="docs",
        )
        self.run_steps(["guide"])

        for output in doc.outputs:
            self.assertEqual(output.read_text().strip(), "rendered")
        self.assertTrue((self.root / "build/guide/guide/intro.md").exists())

        prefix = self.root / "prefix"
        installed = self.engine.install(prefix)
        self.assertEqual(
            installed,
            [
                prefix / "share/doc/guide/guide.pdf",
                prefix / "share/doc/guide/guide.html",
            ],
        )
        self.assertTrue(all(p.exists() for p in installed))

    def test_site_pipeline(self):
        self.write("web/mkdocs.yml", "site_name: Test\n")
        self.write("web/docs/index.md")
        self.engine.graph.distribution = "el6"
        doc = self.engine.site_docs(
            name="web-site",
            source_dir="web",
            destination="share/doc/web",
            component="docs",
        )
        self.run_steps(["web-site"])
        self.assertEqual(doc.outputs[0].read_text().strip(), "en_US.utf8")

        prefix = self.root / "prefix"
        self.engine.install(prefix, ["docs"])
        self.assertTrue((prefix / "share/doc/web/site/index.html").exists())

    def test_consecutive_builds(self):
        source = self.write("guide/intro.md", "first\n")
        doc = self.engine.document_docs(
            name="guide", sources=["guide/*.md"], destination="doc", component="docs"
        )
        staged = self.root / "build/guide/guide/intro.md"

        self.run_steps(["guide"])
        self.assertEqual(staged.read_text(), "first\n")
        for output in doc.outputs:
            os.utime(output, (0, 0))

        source.write_text("second\n")
        self.run_steps(["guide"])
        self.assertEqual(staged.read_text(), "second\n")
        for output in doc.outputs:
            self.assertGreater(output.stat().st_mtime, 0)
            self.assertEqual(output.read_text().strip(), "rendered")

    def test_clean(self):
        self.write("a.md")
        doc = self.engine.document_docs(
            name="a", sources=["a.md"], destination="doc", component="docs"
        )
        self.run_steps(["a"])
        self.assertTrue(all(p.exists() for p in doc.outputs))
        self.run_steps(["a"], Goal.CLEAN)
        self.assertFalse(any(p.exists() for p in doc.outputs))

    def test_renderer_failure(self):
        Config.get().pandoc = "false"
        self.write("a.md")
        self.engine.document_docs(
            name="a", sources=["a.md"], destination="doc", component="docs"
        )
        with self.assertRaises(BuildError):
            self.run_steps(["a"])


# --------------------------------------------------------------------
class TargetSelectionTests(EngineTestCase):
    def test_compiled_artifacts_are_not_steps(self):
        self.engine.static_library(name="mathutil", sources=["a.c"])
        with self.assertRaises(InvalidTargetError):
            self.engine.compile_targets(["mathutil"])

    def test_unknown_target(self):
        with self.assertRaises(InvalidTargetError):
            self.engine.compile_targets(["nope"])

    def test_dashes_for_underscores(self):
        self.write("a.md")
        self.engine.document_docs(
            name="user_guide", sources=["a.md"], destination="doc", component="docs"
        )
        recipes = self.engine.compile_targets(["user-guide"])
        self.assertIs(recipes[0], self.engine.graph.step("user_guide"))
        self.assertEqual(self.engine.all_targets(), recipes)

    def test_install_missing_subject(self):
        self.engine.static_library(name="mathutil", sources=["a.c"])
        with self.assertRaises(BuildError):
            self.engine.install(self.root / "prefix")
        self.assertEqual(self.engine.install(self.root / "prefix", ["runtime"]), [])


# --------------------------------------------------------------------
if __name__ == "__main__":
    unittest.main()
