"""Tests for the ``python -m factory_layout`` argument handling."""

from __future__ import annotations

import contextlib
import io
import unittest
from unittest import mock

from factory_layout.__main__ import build_parser, main, rules_from_args
from factory_layout.config import LAYOUT_RULES


def _parse(*argv: str):
    return build_parser().parse_args(list(argv))


class TestServeArguments(unittest.TestCase):

    def test_defaults_keep_the_standard_rules(self):
        args = _parse("serve")
        self.assertEqual((args.host, args.port), ("127.0.0.1", 8000))
        self.assertEqual(rules_from_args(args), LAYOUT_RULES)

    def test_floor_extent_and_scale(self):
        rules = rules_from_args(_parse(
            "serve", "--floor", "40x25.5", "--extent", "footprint", "--ppm", "20",
        ))
        self.assertEqual((rules.floor_width_m, rules.floor_height_m), (40.0, 25.5))
        self.assertEqual(rules.extent_mode, "footprint")
        self.assertEqual(rules.pixels_per_meter, 20.0)
        self.assertEqual(rules.floor_width_px, 800)

    def test_bad_values_are_rejected(self):
        for argv in (
            ("serve", "--floor", "40"),
            ("serve", "--floor", "0x10"),
            ("serve", "--floor", "wide x deep"),
            ("serve", "--extent", "walls"),
            ("serve", "--ppm", "-1"),
            (),
        ):
            with self.subTest(argv=argv), \
                    contextlib.redirect_stderr(io.StringIO()), \
                    self.assertRaises(SystemExit):
                _parse(*argv)

    def test_serve_hands_rules_to_the_server(self):
        with mock.patch("factory_layout.web.server.main") as serve:
            self.assertEqual(main(["serve", "--port", "3000", "--floor", "12x8"]), 0)
        kwargs = serve.call_args.kwargs
        self.assertEqual(kwargs["port"], 3000)
        self.assertEqual(kwargs["rules"].floor_height_m, 8.0)


if __name__ == "__main__":
    unittest.main()
