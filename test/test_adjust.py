import unittest
from test import bootstrap
from test.bootstrap import line, square

from kerfadjust.core.adjust import adjust_segments
from kerfadjust.core.exceptions import (
    CannotOffsetEntity,
    CannotOffsetOpenContour,
    UnsupportedEntity,
)
from kerfadjust.core.segments import Circle, Text, Unsupported


class TestAdjustSegments(unittest.TestCase):
    def setUp(self):
        self.kernel = bootstrap.bootstrap()
        self.messages = []
        self.channel = self.kernel.channel("kerf")
        self.channel.watch(self.messages.append)

    def tearDown(self):
        self.kernel()

    def test_drawing(self):
        circle = Circle((10, 10), 2)
        text = Text((0, 0), "part")
        stray = line(20, 20, 21, 21)
        segments = square() + [circle, text, stray]
        report = adjust_segments(segments, 0.1, channel=self.channel)

        self.assertEqual(len(report.contours), 4)
        self.assertEqual(report.closed, 3)
        self.assertEqual(report.open, 1)
        self.assertEqual(report.adjusted, 2)
        self.assertEqual([index for index, _ in report.failures], [1, 3])
        self.assertIsInstance(report.failures[0][1], CannotOffsetEntity)
        self.assertIsInstance(report.failures[1][1], CannotOffsetOpenContour)

        self.assertAlmostEqual(report.contours[0].segments[0].radius, 2.1)
        self.assertIs(report.contours[1].segments[0], text)
        self.assertIs(report.contours[3].segments[0], stray)
        self.assertEqual(len(report.segments), 7)
        self.assertTrue(any("Keeping original" in m for m in self.messages))

    def test_zero_amount(self):
        report = adjust_segments(square(), 0)
        self.assertEqual(report.adjusted, 1)
        self.assertEqual(report.failures, [])
        self.assertEqual(len(report.segments), 4)

    def test_unsupported(self):
        report = adjust_segments(square() + [Unsupported("SPLINE")], 0.1)
        self.assertEqual(report.adjusted, 1)
        self.assertEqual(len(report.failures), 1)
        self.assertEqual(report.failures[0][1].kind, "SPLINE")

    def test_unsupported_strict(self):
        with self.assertRaises(UnsupportedEntity):
            adjust_segments(square() + [Unsupported("SPLINE")], 0.1, strict=True)

    def test_empty(self):
        report = adjust_segments([], 0.1)
        self.assertEqual(report.segments, [])
        self.assertIn("contours=0", repr(report))
