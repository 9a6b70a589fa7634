import unittest
import numpy as np
from kd_tree import Point
from result_set import CursorExhausted, ResultSet

class TestResultSet(unittest.TestCase):
    def setUp(self):
        self.entries = [(Point([0, 0]), 0.0), (Point([3, 4]), 25.0), (Point([6, 8]), 100.0)]
        self.results = ResultSet(self.entries)

    def test_cursor_walk(self):
        seen = []
        while not self.results.is_exhausted():
            seen.append(self.results.current())
            self.results.advance()
        self.assertEqual(seen, self.entries)
        self.assertTrue(self.results.is_exhausted())

    def test_current_does_not_move(self):
        self.assertIs(self.results.current(), self.results.current())

    def test_current_distance(self):
        self.results.advance()
        self.assertEqual(self.results.current_distance(), 5.0)

    def test_current_past_end(self):
        for _ in range(3):
            self.results.advance()
        with self.assertRaises(CursorExhausted):
            self.results.current()

    def test_advance_past_end_is_noop(self):
        for _ in range(10):
            self.results.advance()
        self.assertEqual(self.results.cursor, 3)
        self.assertTrue(self.results.is_exhausted())

    def test_len_ignores_cursor(self):
        self.results.advance()
        self.assertEqual(len(self.results), 3)

    def test_iteration_is_single_pass(self):
        self.assertEqual(len(list(self.results)), 3)
        self.assertEqual(list(self.results), [])

    def test_empty(self):
        results = ResultSet([])
        self.assertTrue(results.is_exhausted())
        with self.assertRaises(CursorExhausted):
            results.current()
        results.advance()
        self.assertEqual(results.cursor, 0)

    def test_entries_keep_payload(self):
        point, dist_sq = ResultSet([(Point([1, 1], "tag"), 2.0)]).current()
        self.assertEqual(point.payload, "tag")
        np.testing.assert_array_equal(point.coordinates, [1.0, 1.0])

if __name__ == '__main__':
    unittest.main()
