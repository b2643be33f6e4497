# /tests/test_cli.py

import unittest
from unittest.mock import patch
import io
import json
import sys
import os
from contextlib import redirect_stderr, redirect_stdout

# Add root directory to path to allow imports from 'main'
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import main as cli
from core.bootstrap import build_orchestrator
from core.config import Settings


def memory_orchestrator():
    return build_orchestrator(Settings(STORE_BACKEND="memory", EMBEDDING_PROVIDER="hash"))


@patch('main.build_orchestrator', side_effect=memory_orchestrator)
class TestCli(unittest.TestCase):

    def _run(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = cli.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_connect_prints_rendered_path(self, _):
        code, out, _ = self._run("connect", "Einstein", "->", "Quantum", "Mechanics")

        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "[Einstein] -PIONEERED-> [Quantum Mechanics]")

    def test_connect_without_path(self, _):
        code, out, _ = self._run("connect", "Einstein", "->", "Hume")

        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), "No connection found.")

    def test_route_prints_json(self, _):
        code, out, _ = self._run("route", "How", "do", "atoms", "bond", "together?")

        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["domain"], "science")

    def test_multi_uses_k(self, _):
        code, out, _ = self._run("multi", "learning", "-k", "1")

        self.assertEqual(code, 0)
        self.assertEqual(len(json.loads(out)["hits"]), 3)

    def test_stats_prints_counts_per_domain(self, _):
        code, out, _ = self._run("stats")

        self.assertEqual(code, 0)
        domains = json.loads(out)["domains"]
        self.assertEqual([d["domain"] for d in domains], ["philosophy", "science", "technology"])

    def test_query_commands_need_a_query(self, _):
        with self.assertRaises(SystemExit), redirect_stderr(io.StringIO()):
            cli.main(["search"])

    def test_orchestrator_errors_exit_with_one(self, _):
        code, _, err = self._run("connect", "Einstein", "->", "Nobody")

        self.assertEqual(code, 1)
        self.assertIn("Nobody", err)


if __name__ == '__main__':
    unittest.main()
