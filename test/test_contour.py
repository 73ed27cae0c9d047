import unittest
from test.bootstrap import line

import numpy as np

from kerfadjust.core.contour import Contour
from kerfadjust.core.endpoints import find_endpoints
from kerfadjust.core.segments import Circle


def contour(*segments):
    result = Contour.from_segment(segments[0])
    for segment in segments[1:]:
        result = result.combine(Contour.from_segment(segment))
    return result


def ends_equal(test, ends, expected):
    test.assertIsNotNone(ends)
    for actual, wanted in zip(ends, expected):
        test.assertTrue(np.allclose(actual[:2], wanted), f"{actual} != {wanted}")


class TestContourCombine(unittest.TestCase):
    def assert_sequential(self, result):
        """Each segment shares an end point with the segment after it."""
        for first, second in zip(result.segments, result.segments[1:]):
            a, b = find_endpoints(first)
            c, d = find_endpoints(second)
            self.assertTrue(
                min(
                    np.linalg.norm(a - c),
                    np.linalg.norm(a - d),
                    np.linalg.norm(b - c),
                    np.linalg.norm(b - d),
                )
                < 1e-6
            )

    def test_start_meets_start(self):
        l1 = line(0, 0, 1, 3)
        l2 = line(0, 0, -3, 1)
        result = Contour.from_segment(l1).combine(Contour.from_segment(l2))
        self.assertEqual(result.segments, [l1, l2])
        ends_equal(self, result.end_points, [(1, 3), (-3, 1)])
        self.assert_sequential(result)

    def test_start_meets_end(self):
        l1 = line(0, 0, 1, 3)
        l2 = line(-3, 1, 0, 0)
        result = Contour.from_segment(l1).combine(Contour.from_segment(l2))
        self.assertEqual(result.segments, [l2, l1])
        ends_equal(self, result.end_points, [(-3, 1), (1, 3)])

    def test_end_meets_start(self):
        l1 = line(1, 3, 0, 0)
        l2 = line(0, 0, -3, 1)
        result = Contour.from_segment(l1).combine(Contour.from_segment(l2))
        self.assertEqual(result.segments, [l1, l2])
        ends_equal(self, result.end_points, [(1, 3), (-3, 1)])

    def test_end_meets_end(self):
        l1 = line(0, 0, 1, 3)
        l2 = line(-3, 1, 1, 3)
        result = Contour.from_segment(l1).combine(Contour.from_segment(l2))
        self.assertEqual(result.segments, [l1, l2])
        ends_equal(self, result.end_points, [(0, 0), (-3, 1)])

    def test_start_meets_start_reverses_whole_run(self):
        l1 = line(0, 0, 1, 0)
        l2 = line(1, 0, 1, 1)
        l3 = line(0, 0, 0, -1)
        run = contour(l1, l2)
        ends_equal(self, run.end_points, [(0, 0), (1, 1)])
        result = run.combine(Contour.from_segment(l3))
        self.assertEqual(result.segments, [l2, l1, l3])
        ends_equal(self, result.end_points, [(1, 1), (0, -1)])
        self.assert_sequential(result)

    def test_end_meets_end_reverses_other_run(self):
        l1 = line(0, 0, 1, 0)
        l2 = line(5, 5, 5, 0)
        l3 = line(5, 0, 1, 0)
        other = contour(l2, l3)
        result = Contour.from_segment(l1).combine(other)
        self.assertEqual(result.segments, [l1, l3, l2])
        ends_equal(self, result.end_points, [(0, 0), (5, 5)])
        self.assert_sequential(result)

    def test_either_order_gives_same_free_ends(self):
        l1 = line(2, 2, 4, 1)
        l2 = line(-1, 0, 4, 1)
        forward = Contour.from_segment(l1).combine(Contour.from_segment(l2))
        backward = Contour.from_segment(l2).combine(Contour.from_segment(l1))
        as_set = lambda c: {tuple(np.round(p, 9)) for p in c.end_points}
        self.assertEqual(as_set(forward), as_set(backward))
        self.assertEqual(len(forward), len(backward))

    def test_closes(self):
        l1, l2, l3, l4 = (
            line(0, 0, 1, 0),
            line(1, 0, 1, 1),
            line(1, 1, 0, 1),
            line(0, 1, 0, 0),
        )
        first = contour(l1, l2)
        second = contour(l3, l4)
        result = first.combine(second)
        self.assertTrue(result.is_closed)
        self.assertEqual(len(result), 4)
        self.assert_sequential(result)

    def test_no_match(self):
        c1 = Contour.from_segment(line(0, 0, 1, 0))
        c2 = Contour.from_segment(line(5, 5, 6, 6))
        segments, ends = list(c1.segments), c1.end_points
        self.assertIsNone(c1.combine(c2))
        self.assertEqual(c1.segments, segments)
        self.assertIs(c1.end_points, ends)

    def test_inputs_unchanged_on_join(self):
        c1 = contour(line(0, 0, 1, 0), line(1, 0, 1, 1))
        c2 = Contour.from_segment(line(0, 0, 0, -1))
        before = list(c1.segments)
        c1.combine(c2)
        self.assertEqual(c1.segments, before)
        self.assertEqual(len(c2), 1)

    def test_closed_contours_do_not_combine(self):
        circle = Contour.from_segment(Circle((0, 0), 1))
        self.assertTrue(circle.is_closed)
        self.assertIsNone(circle.combine(Contour.from_segment(line(0, 0, 1, 0))))
        self.assertIsNone(Contour.from_segment(line(0, 0, 1, 0)).combine(circle))

    def test_tolerance(self):
        c1 = Contour.from_segment(line(0, 0, 1, 0))
        near = Contour.from_segment(line(1 + 1e-7, 0, 2, 0))
        far = Contour.from_segment(line(1 + 1e-5, 0, 2, 0))
        self.assertIsNotNone(c1.combine(near))
        self.assertIsNone(c1.combine(far))
        self.assertIsNotNone(c1.combine(far, tolerance=1e-4))

    def test_repr(self):
        self.assertIn("closed", repr(Contour.from_segment(Circle((0, 0), 1))))
        self.assertIn("segments=1", repr(Contour.from_segment(line(0, 0, 1, 0))))
