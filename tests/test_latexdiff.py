"""Tests for latexdiff.py"""

import argparse
import unittest

from diffmk.latexdiff import LatexdiffOpts, add_arguments


class TestLatexdiffOpts(unittest.TestCase):
    def test_defaults_only_encoding(self):
        self.assertEqual(LatexdiffOpts().args(), ["--encoding=utf8"])

    def test_explicit_encoding(self):
        self.assertEqual(LatexdiffOpts(encoding="latin1").args(), ["--encoding=latin1"])

    def test_value_and_flag_options(self):
        opts = LatexdiffOpts(markup_style="CFONT", math_markup="coarse", disable_citation_markup=True)
        self.assertEqual(opts.args(), [
            "--type=CFONT",
            "--encoding=utf8",
            "--math-markup=coarse",
            "--disable-citation-markup",
        ])

    def test_verbose_goes_after_mbox_options(self):
        opts = LatexdiffOpts(enforce_auto_mbox=True, driver="pdftex")
        args = opts.args(verbose=True)
        self.assertEqual(args[-3:], ["--enforce-auto-mbox", "--verbose", "--driver=pdftex"])

    def test_no_verbose_by_default(self):
        self.assertNotIn("--verbose", LatexdiffOpts().args())


class TestAddArguments(unittest.TestCase):
    def test_short_flags(self):
        parser = argparse.ArgumentParser()
        add_arguments(parser)

        args = parser.parse_args(["-t", "UNDERLINE", "-L", "old", "--no-label", "-a", "mycmd"])
        opts = LatexdiffOpts.from_namespace(args)

        self.assertEqual(opts.markup_style, "UNDERLINE")
        self.assertEqual(opts.label, "old")
        self.assertTrue(opts.no_label)
        self.assertEqual(opts.append_safe_cmd, "mycmd")
        self.assertIn("--append-safecmd=mycmd", opts.args())


if __name__ == "__main__":
    unittest.main()
