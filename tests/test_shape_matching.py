import unittest

from handpose.config import CONFIG
from handpose.core.shape_matching import exact_match, tolerant_match
from handpose.core.types import FingerShape

S = FingerShape

class TestExactMatch(unittest.TestCase):
    def test_equal_patterns(self):
        self.assertTrue(exact_match([1, 4, 4, 4, 4], [1, 4, 4, 4, 4]))
        self.assertFalse(exact_match([1, 4, 4, 4, 4], [1, 4, 4, 4, 3]))

    def test_dont_care_slots_are_skipped(self):
        """Don't-care slots accept any shape, including ones the finger never reads."""
        for got in (S.EXTENDED, S.CURVED, S.BENT, S.FOLDED, S.INWARD, S.MAX):
            self.assertTrue(exact_match([0, 1, 0, 0, 0], [got, 1, 4, 4, 4]))

    def test_wrong_length_never_matches(self):
        self.assertFalse(exact_match([1, 4, 4, 4], [1, 4, 4, 4, 4]))
        self.assertFalse(exact_match([1, 4, 4, 4, 4, 4], [1, 4, 4, 4, 4]))
        self.assertFalse(exact_match([0, 0, 0, 0, 0], [1, 4, 4, 4]))

    def test_max_never_matches(self):
        self.assertFalse(exact_match([6, 4, 4, 4, 4], [6, 4, 4, 4, 4]))

class TestTolerantMatch(unittest.TestCase):
    def setUp(self):
        CONFIG["MATCH_EPSILON"] = 0.01

    def test_zero_tolerance_full_fraction_is_exact(self):
        """tolerant(d, a, 0, 1.0) agrees with exact(d, a)."""
        desired = [1, 4, 0, 2, 3]
        cases = ([1, 4, 5, 2, 3], [1, 4, 1, 2, 2], [2, 4, 4, 2, 3], [1, 4, 6, 2, 3], [1, 5, 4, 2, 3])
        for actual in cases:
            with self.subTest(actual=actual):
                self.assertEqual(tolerant_match(desired, actual, 0, 1.0), exact_match(desired, actual))

    def test_step_beyond_tolerance_fails(self):
        """One slot too far away fails regardless of how many others are right."""
        self.assertFalse(tolerant_match([1, 4, 4, 4, 4], [3, 4, 4, 4, 4], 1, 0.0))
        self.assertTrue(tolerant_match([1, 4, 4, 4, 4], [2, 4, 4, 4, 4], 1, 0.8))

    def test_fraction_threshold(self):
        # 3 of 5 exact
        self.assertTrue(tolerant_match([1, 1, 1, 1, 1], [1, 1, 1, 2, 2], 1, 0.6))
        self.assertFalse(tolerant_match([1, 1, 1, 1, 1], [1, 1, 1, 2, 2], 1, 0.7))

    def test_epsilon_absorbs_rounding(self):
        """Two of three exact passes a 0.67 requirement."""
        self.assertTrue(tolerant_match([1, 1, 1, 0, 0], [1, 1, 2, 4, 4], 1, 0.67))
        self.assertFalse(tolerant_match([1, 1, 1, 0, 0], [1, 1, 2, 4, 4], 1, 0.68))

    def test_all_dont_care_is_vacuous(self):
        self.assertTrue(tolerant_match([0, 0, 0, 0, 0], [1, 2, 3, 4, 5], 0, 1.0))
        self.assertTrue(exact_match([0, 0, 0, 0, 0], [1, 2, 3, 4, 5]))

    def test_max_in_considered_slot(self):
        self.assertFalse(tolerant_match([5, 4, 4, 4, 4], [6, 4, 4, 4, 4], 1, 0.0))

    def test_wrong_length(self):
        self.assertFalse(tolerant_match([1, 4, 4, 4], [1, 4, 4, 4], 4, 0.0))

if __name__ == '__main__':
    unittest.main()
