import contextlib
import io
import json
import os
import tempfile
import unittest
from unittest import mock

from docx_fixtures import build_docx

from docx_formatter.cli import main, parse_args


class TestCli(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.path = os.path.join(self.tmpdir.name, "guide.docx")
        with open(self.path, "wb") as fh:
            fh.write(build_docx(headings=[("USER Guide", 1), ("Install", 2)]))

    def run_cli(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = main(parse_args(list(argv)))
        return code, out.getvalue(), err.getvalue()

    def test_summary(self):
        code, out, _err = self.run_cli(self.path)
        self.assertEqual(code, 0)
        self.assertIn("H1->H2 1", out)
        self.assertIn("1 H1 element converted to H2", out)

    def test_json_and_export(self):
        code, out, err = self.run_cli(self.path, "--json", "--output-dir", self.tmpdir.name)
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["analysis"]["headingCounts"]["h1"], 1)
        self.assertIn("User guide", payload["content"]["formatted"]["html"])
        self.assertTrue(os.path.exists(os.path.join(self.tmpdir.name, "guide_formatted.html")))
        self.assertIn("guide_formatted.html", err)

    def test_disabled_headings(self):
        code, out, _err = self.run_cli(self.path, "--json", "--no-headings")
        self.assertEqual(code, 0)
        self.assertIn("USER Guide", json.loads(out)["content"]["formatted"]["html"])

    def test_validation_error(self):
        other = os.path.join(self.tmpdir.name, "notes.txt")
        with open(other, "w", encoding="utf-8") as fh:
            fh.write("plain")
        code, _out, err = self.run_cli(other)
        self.assertEqual(code, 1)
        self.assertIn(".docx", err)

    def test_directory_argument(self):
        code, _out, err = self.run_cli(self.tmpdir.name)
        self.assertEqual(code, 1)
        self.assertTrue(err.startswith("error:"))

    def test_missing_proper_noun_file(self):
        missing = os.path.join(self.tmpdir.name, "nouns.txt")
        with mock.patch.dict(os.environ, {"DOCX_FORMATTER_PROPER_NOUNS": missing}):
            code, _out, err = self.run_cli(self.path)
        self.assertEqual(code, 1)
        self.assertIn("nouns.txt", err)

    def test_missing_file(self):
        code, _out, err = self.run_cli(os.path.join(self.tmpdir.name, "nope.docx"))
        self.assertEqual(code, 1)
        self.assertIn("no such file", err)


if __name__ == "__main__":
    unittest.main()
