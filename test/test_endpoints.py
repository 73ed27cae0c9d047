import unittest

import numpy as np

from kerfadjust.core.endpoints import find_endpoints
from kerfadjust.core.exceptions import ThreeDimensionalEntity, UnsupportedEntity
from kerfadjust.core.segments import Arc, Circle, Line, Text, Unsupported


class TestFindEndpoints(unittest.TestCase):
    def test_line_endpoints_in_stored_order(self):
        ends = find_endpoints(Line((1, 2), (4, 6)))
        self.assertTrue(np.array_equal(ends[0], [1, 2, 0]))
        self.assertTrue(np.array_equal(ends[1], [4, 6, 0]))

    def test_arc_quarter(self):
        start, end = find_endpoints(Arc((1, 1), 2, 0, 90))
        self.assertTrue(np.allclose(start, [3, 1, 0]))
        self.assertTrue(np.allclose(end, [1, 3, 0]))

    def test_arc_negative_and_wrapped_angles(self):
        start, end = find_endpoints(Arc((0, 0), 1, -90, 450))
        self.assertTrue(np.allclose(start, [0, -1, 0]))
        self.assertTrue(np.allclose(end, [0, 1, 0]))

    def test_arc_keeps_center_z(self):
        start, end = find_endpoints(Arc((0, 0, 5), 1, 180, 270))
        self.assertTrue(np.allclose(start, [-1, 0, 5]))
        self.assertTrue(np.allclose(end, [0, -1, 5]))

    def test_circle_has_no_endpoints(self):
        self.assertIsNone(find_endpoints(Circle((0, 0), 3)))

    def test_text_has_no_endpoints(self):
        self.assertIsNone(find_endpoints(Text((0, 0), "part 7")))

    def test_tilted_arc(self):
        """Arcs outside the XY plane are skipped unless strict."""
        arc = Arc((0, 0), 1, 0, 90, normal=(1, 0, 0))
        self.assertIsNone(find_endpoints(arc))
        with self.assertRaises(ThreeDimensionalEntity):
            find_endpoints(arc, strict=True)

    def test_flipped_normal_is_three_dimensional(self):
        arc = Arc((0, 0), 1, 0, 90, normal=(0, 0, -1))
        with self.assertRaises(ThreeDimensionalEntity):
            find_endpoints(arc, strict=True)

    def test_unsupported(self):
        with self.assertRaises(UnsupportedEntity) as cm:
            find_endpoints(Unsupported("SPLINE"))
        self.assertEqual(cm.exception.kind, "SPLINE")
        self.assertIn("SPLINE", str(cm.exception))

    def test_deterministic(self):
        arc = Arc((2, -1), 0.5, 30, 200)
        first = find_endpoints(arc)
        second = find_endpoints(arc)
        self.assertTrue(np.array_equal(first[0], second[0]))
        self.assertTrue(np.array_equal(first[1], second[1]))


class TestSegments(unittest.TestCase):
    def test_segments_are_frozen(self):
        line = Line((0, 0), (1, 0))
        with self.assertRaises(ValueError):
            line.start[0] = 5

    def test_replace_keeps_attributes(self):
        line = Line((0, 0), (1, 0), attributes={"layer": "CUT"})
        moved = line.replace(end=(2, 0))
        self.assertEqual(moved.attributes, {"layer": "CUT"})
        self.assertEqual(moved.length, 2)
        self.assertEqual(line.length, 1)

    def test_equality(self):
        self.assertEqual(Line((0, 0), (1, 0)), Line((0, 0, 0), [1, 0, 0]))
        self.assertNotEqual(Line((0, 0), (1, 0)), Line((1, 0), (0, 0)))
        self.assertNotEqual(Circle((0, 0), 1), Arc((0, 0), 1, 0, 360))

    def test_arc_sweep(self):
        self.assertEqual(Arc((0, 0), 1, 270, 90).sweep, 180)
        self.assertEqual(Arc((0, 0), 1, 0, 360).sweep, 360)
        self.assertAlmostEqual(Arc((0, 0), 2, 0, 90).length, np.pi)

    def test_unsupported_kind(self):
        self.assertEqual(Unsupported("HATCH").kind, "HATCH")
