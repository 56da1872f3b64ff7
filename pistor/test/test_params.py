# --------------------------------------------------------------------
# test_params.py
#
# Author: Lain Musgrove (lain.proliant@gmail.com)
# Date: Wednesday, March 10 2021
#
# Distributed under terms of the MIT license.
# --------------------------------------------------------------------

import unittest
from pathlib import Path

from pistor.artifacts import FileArtifact, NullArtifact, PolyArtifact
from pistor.params import digest_env, digest_param, digest_param_map
from pistor.shell import sh


# --------------------------------------------------------------------
class ParamsTests(unittest.TestCase):
    def test_digest_env(self):
        env = {
            'A': [1, 2, 3],
            'B': 'value',
            'LANG': 'en_US.UTF-8',
        }

        result = digest_env(env)
        self.assertEqual(result['A'], '1 2 3')
        self.assertEqual(result['B'], 'value')
        self.assertEqual(result['LANG'], 'en_US.UTF-8')

    def test_digest_param(self):
        self.assertEqual(digest_param(1), ['1'])
        self.assertEqual(digest_param('alpha'), ['alpha'])
        self.assertEqual(digest_param(('--toc', '--standalone')),
                         ['--toc', '--standalone'])
        self.assertEqual(digest_param([
            Path('/a/b/c'),
            'oranges',
            NullArtifact(),
            FileArtifact(Path('/usr/share/doc/index.html'))
        ]), [
            '/a/b/c',
            'oranges',
            '/usr/share/doc/index.html'
        ])

    def test_digest_param_relative(self):
        artifacts = PolyArtifact([
            FileArtifact(Path('/build/manual/a.md')),
            FileArtifact(Path('/elsewhere/b.md')),
        ])
        self.assertEqual(digest_param(artifacts, Path('/build/manual')),
                         ['a.md', '/elsewhere/b.md'])

    def test_digest_param_map(self):
        result = digest_param_map({'options': ['--css', 'my style.css'], 'tool': 'pandoc'})
        self.assertEqual(result['options'], "--css 'my style.css'")
        self.assertEqual(result['tool'], 'pandoc')

    def test_shell_factory(self):
        recipe = sh("{tool} {options} -o {output} {input}",
                    cwd=Path('/build/manual'),
                    input=[Path('a.md'), Path('b.md')],
                    output='manual.html',
                    tool='pandoc',
                    options=['--toc'])
        self.assertEqual(recipe.cmd, 'pandoc --toc -o manual.html a.md b.md')
        self.assertEqual(recipe.output.path, Path('/build/manual/manual.html'))


# --------------------------------------------------------------------
if __name__ == "__main__":
    unittest.main()
