# /tests/test_router.py

import unittest
from unittest.mock import MagicMock
import sys
import os

# Add root directory to path to allow imports from 'core'
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from core.embeddings import HashingEmbedder
from core.exceptions import ConfigurationError, InvalidQuery
from core.models import Domain
from core.router import IntentRouter
from support import EXEMPLARS, FixedEmbedder


class TestIntentRouter(unittest.TestCase):

    def setUp(self):
        self.router = IntentRouter(HashingEmbedder(384), EXEMPLARS, top_k=1, tie_epsilon=1e-6)

    def test_routes_chemistry_question_to_science(self):
        decision = self.router.route("How do atoms bond together?")

        self.assertEqual(decision.domain, Domain.SCIENCE)
        self.assertGreater(decision.confidence, decision.scores[Domain.TECHNOLOGY])
        self.assertGreater(decision.confidence, decision.scores[Domain.PHILOSOPHY])

    def test_routes_other_domains(self):
        self.assertEqual(self.router.route("Can neural networks learn from little data?").domain, Domain.TECHNOLOGY)
        self.assertEqual(self.router.route("Do humans really have free will?").domain, Domain.PHILOSOPHY)

    def test_confidence_is_bounded_and_deterministic(self):
        for query in ["quantum", "deploy kubernetes containers", "meaning of life", "zzz unrelated words"]:
            first = self.router.route(query)
            second = self.router.route(query)

            self.assertIn(first.domain, set(Domain))
            self.assertGreaterEqual(first.confidence, 0.0)
            self.assertLessEqual(first.confidence, 1.0)
            self.assertEqual(first, second)

    def test_empty_and_blank_queries_are_rejected(self):
        for query in ["", "   ", None]:
            with self.assertRaises(InvalidQuery):
                self.router.route(query)

    def test_blank_query_is_rejected_before_embedding(self):
        embedder = HashingEmbedder(16)
        router = IntentRouter(embedder, EXEMPLARS)
        embedder.embed = MagicMock(side_effect=AssertionError("embed should not be called"))

        with self.assertRaises(InvalidQuery):
            router.route("\t\n")

    def test_exact_tie_goes_to_first_domain_identifier(self):
        # Every text embeds to the same vector, so all three domains score 1.0
        embedder = FixedEmbedder({"anything": [1.0, 0.0]})
        router = IntentRouter(embedder, EXEMPLARS)

        decision = router.route("anything")

        self.assertEqual(decision.domain, Domain.PHILOSOPHY)
        self.assertAlmostEqual(decision.confidence, 1.0)

    def test_scores_within_epsilon_count_as_a_tie(self):
        embedder = FixedEmbedder({
            "query": [1.0, 0.0],
            "science exemplar": [1.0, 0.0],
            "philosophy exemplar": [0.995, 0.0998],
            "technology exemplar": [0.0, 1.0],
        })
        exemplars = {
            Domain.SCIENCE: ["science exemplar"],
            Domain.PHILOSOPHY: ["philosophy exemplar"],
            Domain.TECHNOLOGY: ["technology exemplar"],
        }

        strict = IntentRouter(embedder, exemplars, tie_epsilon=0.0).route("query")
        loose = IntentRouter(embedder, exemplars, tie_epsilon=0.01).route("query")

        self.assertEqual(strict.domain, Domain.SCIENCE)
        self.assertEqual(loose.domain, Domain.PHILOSOPHY)
        self.assertAlmostEqual(loose.scores[Domain.TECHNOLOGY], 0.5)

    def test_top_k_averages_best_exemplars(self):
        embedder = FixedEmbedder({
            "query": [1.0, 0.0],
            "close": [1.0, 0.0],
            "orthogonal": [0.0, 1.0],
        })
        exemplars = {Domain.SCIENCE: ["close", "orthogonal"], Domain.TECHNOLOGY: ["orthogonal"], Domain.PHILOSOPHY: ["orthogonal"]}

        best_only = IntentRouter(embedder, exemplars, top_k=1).score_domains("query")
        averaged = IntentRouter(embedder, exemplars, top_k=2).score_domains("query")

        self.assertAlmostEqual(best_only[Domain.SCIENCE], 1.0)
        self.assertAlmostEqual(averaged[Domain.SCIENCE], 0.75)

    def test_domain_without_exemplars_is_a_configuration_error(self):
        with self.assertRaises(ConfigurationError):
            IntentRouter(HashingEmbedder(16), {Domain.SCIENCE: ["atoms"], Domain.TECHNOLOGY: ["  "]})


if __name__ == '__main__':
    unittest.main()
