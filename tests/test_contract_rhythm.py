from __future__ import annotations

import unittest

from harmonious.rhythm import RhythmEngine, make_rhythm_config
from harmonious.units import unit_less


def _engine(**options) -> RhythmEngine:
    return RhythmEngine.from_options(options)


class TestRhythmConfigContract(unittest.TestCase):
    def test_defaults(self) -> None:
        cfg = make_rhythm_config()
        self.assertEqual(cfg.base_font_size, 16)
        self.assertEqual(cfg.base_line_height, 1.5)
        self.assertEqual(cfg.base_line_height_px, 24)
        self.assertEqual(cfg.rhythm_unit, "rem")
        self.assertTrue(cfg.round_to_nearest_half_line)

    def test_line_height_px_tracks_unitless_line_height(self) -> None:
        for opts in ({"base_font_size": "21px", "base_line_height": 4 / 3}, {"base_font_size": 20, "base_line_height": "24px"}):
            cfg = make_rhythm_config(opts)
            self.assertAlmostEqual(cfg.base_line_height_px, cfg.base_line_height * cfg.base_font_size)

    def test_line_height_with_unit_is_converted(self) -> None:
        self.assertAlmostEqual(make_rhythm_config({"base_font_size": 20, "base_line_height": "24px"}).base_line_height, 1.2)
        self.assertAlmostEqual(make_rhythm_config({"base_font_size": 24, "base_line_height": "30px"}).base_line_height, 1.25)

    def test_font_size_parsing(self) -> None:
        self.assertEqual(make_rhythm_config({"base_font_size": "1.5rem"}).base_font_size, 24)
        self.assertEqual(make_rhythm_config({"base_font_size": "150%"}).base_font_size, 24)
        self.assertEqual(make_rhythm_config({"base_font_size": "abc"}).base_font_size, 16)
        self.assertEqual(make_rhythm_config({"base_font_size": "2vw"}).base_font_size, 16)

    def test_invalid_values_fall_back(self) -> None:
        cfg = make_rhythm_config({"rhythm_unit": "pt", "base_line_height": "nope", "min_line_padding": "x"})
        self.assertEqual(cfg.rhythm_unit, "rem")
        self.assertEqual(cfg.base_line_height, 1.5)
        self.assertEqual(cfg.min_line_padding, 2)

    def test_named_scale_ratio(self) -> None:
        self.assertAlmostEqual(make_rhythm_config({"scale_ratio": "perfect fourth"}).scale_ratio, 4 / 3)
        self.assertEqual(make_rhythm_config({"scale_ratio": 2}).scale_ratio, 2)

    def test_string_flags(self) -> None:
        self.assertFalse(make_rhythm_config({"round_to_nearest_half_line": "false"}).round_to_nearest_half_line)


class TestRhythmContract(unittest.TestCase):
    def test_rem(self) -> None:
        eng = _engine(base_font_size="21px", base_line_height=4 / 3, rhythm_unit="rem")
        self.assertEqual(eng.rhythm(1), "1.33333rem")
        self.assertEqual(eng.rhythm(0.5), "0.66667rem")
        self.assertEqual(eng.rhythm(0.25), "0.33333rem")

    def test_em(self) -> None:
        eng = _engine(base_font_size="24px", base_line_height=1.25, rhythm_unit="em")
        self.assertEqual(eng.rhythm(1), "1.25em")
        self.assertEqual(eng.rhythm(0.5), "0.625em")
        self.assertEqual(eng.rhythm(0.25), "0.3125em")

    def test_px_is_floored(self) -> None:
        eng = _engine(base_font_size="24px", base_line_height=1.25, rhythm_unit="px")
        self.assertEqual(eng.rhythm(1), "30px")
        self.assertEqual(eng.rhythm(0.5), "15px")
        self.assertEqual(eng.rhythm(0.25), "7px")

    def test_px_line_height(self) -> None:
        eng = _engine(base_font_size="24px", base_line_height="30px", rhythm_unit="px")
        self.assertEqual(eng.rhythm(1), "30px")
        self.assertEqual(eng.rhythm(0.5), "15px")
        self.assertEqual(eng.rhythm(0.25), "7px")

    def test_offset_is_subtracted(self) -> None:
        eng = _engine(base_font_size="24px", base_line_height=1.25, rhythm_unit="px")
        self.assertEqual(eng.rhythm(1, None, 1), "29px")

    def test_em_uses_font_size_context(self) -> None:
        eng = _engine(base_font_size="24px", base_line_height=1.25, rhythm_unit="em")
        self.assertEqual(eng.rhythm(1, "15px"), "2em")

    def test_length_is_rounded_once_after_conversion(self) -> None:
        eng = _engine(rhythm_unit="em")
        self.assertEqual(eng.rhythm(0.000001, "0.1px"), "0.00024em")

    def test_default_rhythm(self) -> None:
        self.assertEqual(_engine().rhythm(), "1.5rem")
        self.assertEqual(_engine().rhythm(0), "0rem")

    def test_monotonic_in_lines(self) -> None:
        for unit in ("px", "em", "rem"):
            eng = _engine(base_font_size="24px", base_line_height=1.25, rhythm_unit=unit)
            values = [unit_less(eng.rhythm(n / 2)) for n in range(0, 21)]
            for a, b in zip(values, values[1:]):
                self.assertLess(a, b, unit)


class TestEstablishBaselineContract(unittest.TestCase):
    def test_percent_of_browser_default(self) -> None:
        eng = _engine(base_font_size="24px", base_line_height=1.25)
        self.assertEqual(eng.establish_baseline(), {"fontSize": "150%", "lineHeight": 1.25})

    def test_line_height_from_px(self) -> None:
        eng = _engine(base_font_size="20px", base_line_height="24px")
        self.assertEqual(eng.establish_baseline()["fontSize"], "125%")
        self.assertAlmostEqual(eng.establish_baseline()["lineHeight"], 1.2)

    def test_default(self) -> None:
        self.assertEqual(_engine().establish_baseline(), {"fontSize": "100%", "lineHeight": 1.5})


class TestLinesForFontSizeContract(unittest.TestCase):
    def setUp(self) -> None:
        self.eng = _engine(base_font_size="21px", base_line_height=4 / 3)

    def test_fits_in_one_line(self) -> None:
        self.assertEqual(self.eng.lines_for_font_size("20px"), 1)
        self.assertEqual(self.eng.lines_for_font_size("24px"), 1)

    def test_cramped_line_gets_extra_half_line(self) -> None:
        self.assertEqual(self.eng.lines_for_font_size("26px"), 1.5)

    def test_large_sizes_take_more_lines(self) -> None:
        self.assertGreater(self.eng.lines_for_font_size("29px"), 1)
        self.assertEqual(self.eng.lines_for_font_size("29px"), 1.5)

    def test_min_line_padding_zero(self) -> None:
        eng = _engine(base_font_size="21px", base_line_height=4 / 3, min_line_padding="0px")
        self.assertEqual(eng.lines_for_font_size("26px"), 1)

    def test_non_finite_sizes_use_base_font_size(self) -> None:
        base_lines = self.eng.lines_for_font_size("21px")
        self.assertEqual(self.eng.lines_for_font_size(float("inf")), base_lines)
        self.assertEqual(self.eng.lines_for_font_size("1e400px"), base_lines)
        self.assertEqual(self.eng.lines_for_font_size(float("nan")), base_lines)

    def test_whole_lines(self) -> None:
        eng = _engine(base_font_size="21px", base_line_height=4 / 3, round_to_nearest_half_line=False)
        self.assertEqual(eng.lines_for_font_size("29px"), 2)
        self.assertEqual(eng.lines_for_font_size("26px"), 2)


class TestAdjustFontSizeToContract(unittest.TestCase):
    def setUp(self) -> None:
        self.eng = _engine(base_font_size="21px", base_line_height=4 / 3)

    def test_font_size_in_rhythm_unit(self) -> None:
        self.assertEqual(self.eng.adjust_font_size_to("63px")["fontSize"], "3rem")
        self.assertEqual(self.eng.adjust_font_size_to("3em")["fontSize"], "3rem")
        self.assertEqual(self.eng.adjust_font_size_to("3rem")["fontSize"], "3rem")

    def test_percent_resolves_against_base(self) -> None:
        self.assertEqual(self.eng.adjust_font_size_to("200%")["fontSize"], "2rem")

    def test_explicit_lines(self) -> None:
        out = self.eng.adjust_font_size_to("3em", 3)
        self.assertEqual(out["fontSize"], "3rem")
        self.assertAlmostEqual(out["lineHeight"], 4)
        self.assertAlmostEqual(out["lineHeight"], self.eng.rhythmic_line_height(3))

    def test_auto_lines_matches_lines_for_font_size(self) -> None:
        auto = self.eng.adjust_font_size_to("63px")
        explicit = self.eng.adjust_font_size_to("63px", self.eng.lines_for_font_size("63px"))
        self.assertEqual(auto, explicit)

    def test_em_with_from_size(self) -> None:
        eng = _engine(base_font_size="21px", base_line_height=4 / 3, rhythm_unit="em")
        self.assertEqual(eng.adjust_font_size_to("3em", 3)["fontSize"], "3em")
        out = eng.adjust_font_size_to("42px", 3, "10.5px")
        self.assertEqual(out["fontSize"], "4em")
        self.assertAlmostEqual(out["lineHeight"], 8)

    def test_non_finite_target_keeps_from_size(self) -> None:
        self.assertEqual(self.eng.adjust_font_size_to(float("inf"))["fontSize"], "1rem")
        self.assertEqual(self.eng.adjust_font_size_to("1e400px", 2)["fontSize"], "1rem")

    def test_line_height_is_unitless(self) -> None:
        out = self.eng.adjust_font_size_to("63px")
        self.assertIsInstance(out["lineHeight"], float)


class TestScaleContract(unittest.TestCase):
    def test_scale_zero_is_base(self) -> None:
        self.assertEqual(_engine().scale(), {"fontSize": "1rem", "lineHeight": 1.5})

    def test_scale_with_ratio(self) -> None:
        out = _engine(scale_ratio=2).scale(1.333)
        self.assertEqual(out["fontSize"], "2.51926rem")
        self.assertAlmostEqual(out["lineHeight"], 3)


class TestLineHeightFromValueContract(unittest.TestCase):
    def setUp(self) -> None:
        self.eng = _engine(base_font_size="24px", base_line_height=1.25)

    def test_lengths(self) -> None:
        self.assertAlmostEqual(self.eng.line_height_from_value("30px"), 1.25)
        self.assertAlmostEqual(self.eng.line_height_from_value("2rem"), 2)

    def test_bare_number_is_pixels(self) -> None:
        self.assertAlmostEqual(self.eng.line_height_from_value(48), 2)

    def test_unparseable_falls_back_to_base_line_height(self) -> None:
        self.assertEqual(self.eng.line_height_from_value("abc"), 1.25)
        self.assertEqual(self.eng.line_height_from_value("2vw"), 1.25)


if __name__ == "__main__":
    unittest.main(verbosity=2)
