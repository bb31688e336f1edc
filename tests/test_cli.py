from __future__ import annotations

import io
import logging
from pathlib import Path
import tempfile
import unittest
from unittest import mock

from lined.cli import build_parser, main, resolve_log_level
from lined.errors import LinedProgramError
from lined.evaluator import compile_program
from lined.runner import read_program_text, run_stream, transform_lines


def _run(argv: list[str], stdin: str = "") -> tuple[int, str, str]:
    stdout = io.StringIO()
    stderr = io.StringIO()
    with mock.patch("sys.stdin", io.StringIO(stdin)), mock.patch("sys.stdout", stdout), mock.patch(
        "sys.stderr", stderr
    ):
        code = main(argv)
    return code, stdout.getvalue(), stderr.getvalue()


class CliTests(unittest.TestCase):
    def test_program_text_over_stdin(self) -> None:
        code, out, err = _run(["-p", 'end insert ";"'], stdin="a\nb\n")
        self.assertEqual(code, 0)
        self.assertEqual(out, "a;\nb;\n")
        self.assertEqual(err, "")

    def test_program_file_and_file_arguments(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            program = root / "prog.led"
            infile = root / "in.txt"
            outfile = root / "out.txt"
            program.write_text('trim_line\ntruncate_by 12\ninsert "const KW_"\n', encoding="utf-8")
            infile.write_text("  kw_forward: Token = 12,  \n  kw_back: Token = 13,\n", encoding="utf-8")

            code, out, _ = _run(["-f", str(program), str(infile), str(outfile)])

            self.assertEqual(code, 0)
            self.assertEqual(out, "")
            self.assertEqual(
                outfile.read_text(encoding="utf-8"),
                "const KW_kw_forward:\nconst KW_kw_back:\n",
            )

    def test_bad_program_leaves_existing_output_file_untouched(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            infile = root / "in.txt"
            outfile = root / "out.txt"
            infile.write_text("a\n", encoding="utf-8")
            outfile.write_text("precious\n", encoding="utf-8")

            code, _, err = _run(["-p", "bogus", str(infile), str(outfile)])

            self.assertEqual(code, 1)
            self.assertIn("error: Unknown command 'bogus'", err)
            self.assertEqual(outfile.read_text(encoding="utf-8"), "precious\n")

    def test_same_input_and_output_file_is_refused(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "lines.txt"
            path.write_text("keep me\n", encoding="utf-8")

            code, _, err = _run(["-p", "upcase_line", str(path), str(Path(tmpdir) / "." / "lines.txt")])

            self.assertEqual(code, 1)
            self.assertIn("must be different files", err)
            self.assertEqual(path.read_text(encoding="utf-8"), "keep me\n")

    def test_missing_input_file_is_an_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            outfile = root / "out.txt"
            code, _, err = _run(["-p", "home", str(root / "absent.txt"), str(outfile)])
        self.assertEqual(code, 1)
        self.assertIn("error:", err)
        self.assertFalse(outfile.exists())

    def test_unknown_log_level_falls_back_to_warning(self) -> None:
        self.assertIsNone(resolve_log_level("foo"))
        self.assertEqual(resolve_log_level("debug"), logging.DEBUG)
        self.assertEqual(resolve_log_level("WARNING"), logging.WARNING)

        with mock.patch("lined.cli._DEFAULT_LOG_LEVEL", "FOO"):
            code, out, _ = _run(["-p", 'end insert "."'], stdin="a\n")
        self.assertEqual(code, 0)
        self.assertEqual(out, "a.\n")

    def test_deeply_nested_repeat_runs(self) -> None:
        code, out, err = _run(["-p", "repeat 1 " * 2000 + 'insert "x"'], stdin="ab\n")
        self.assertEqual(code, 0)
        self.assertEqual(out, "xab\n")
        self.assertEqual(err, "")

    def test_crlf_line_endings_are_stripped(self) -> None:
        code, out, _ = _run(["-p", 'end insert "|"'], stdin="one\r\ntwo")
        self.assertEqual(code, 0)
        self.assertEqual(out, "one|\ntwo|\n")

    def test_parse_error_exits_before_reading_input(self) -> None:
        stdin = mock.MagicMock()
        with mock.patch("sys.stdin", stdin), mock.patch("sys.stdout", io.StringIO()) as stdout, mock.patch(
            "sys.stderr", io.StringIO()
        ) as stderr:
            code = main(["-p", "home\nleap"])
        self.assertEqual(code, 1)
        self.assertEqual(stdout.getvalue(), "")
        self.assertIn("error: Unknown command 'leap' at line 2, column 5", stderr.getvalue())
        stdin.__iter__.assert_not_called()

    def test_empty_program_is_an_error(self) -> None:
        code, out, err = _run(["-p", "   "], stdin="a\n")
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("error: program contains no commands", err)

    def test_missing_program_file_is_an_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            missing = Path(tmpdir) / "nope.led"
            code, _, err = _run(["-f", str(missing)])
        self.assertEqual(code, 1)
        self.assertIn("error: cannot read program file", err)

    def test_ignore_done_keeps_running_commands(self) -> None:
        argv = ["-p", 'find "z" insert ">"']
        self.assertEqual(_run(argv, stdin="abc\n")[1], "abc\n")
        self.assertEqual(_run(argv + ["--ignore-done"], stdin="abc\n")[1], ">abc\n")

    def test_program_source_is_required_and_exclusive(self) -> None:
        parser = build_parser()
        with mock.patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit):
                parser.parse_args([])
            with self.assertRaises(SystemExit):
                parser.parse_args(["-p", "home", "-f", "prog.led"])

    def test_long_option_names(self) -> None:
        args = build_parser().parse_args(["--programtext", "home", "--verbose"])
        self.assertEqual(args.programtext, "home")
        self.assertTrue(args.verbose)
        self.assertFalse(args.ignore_done)


class RunnerTests(unittest.TestCase):
    def test_read_program_text_requires_exactly_one_source(self) -> None:
        with self.assertRaises(ValueError):
            read_program_text()
        with self.assertRaises(ValueError):
            read_program_text(text="home", path="prog.led")

    def test_read_program_text_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "prog.led"
            path.write_text('insert "ä"\n', encoding="utf-8")
            self.assertEqual(read_program_text(path=path), 'insert "ä"\n')

    def test_read_program_text_wraps_undecodable_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "prog.led"
            path.write_bytes(b"\xff\xfe\xfa")
            with self.assertRaises(LinedProgramError):
                read_program_text(path=path)

    def test_transform_lines_is_lazy(self) -> None:
        compiled = compile_program("upcase_line")
        lines = iter(["a\n", "b\n", "c\n"])
        out = transform_lines(compiled, lines)
        self.assertEqual(next(out), "A")
        self.assertEqual(next(lines), "b\n")

    def test_run_stream_writes_one_line_per_input_line(self) -> None:
        compiled = compile_program("kill_line")
        outfile = io.StringIO()
        count = run_stream(compiled, io.StringIO("x\n\ny"), outfile)
        self.assertEqual(count, 3)
        self.assertEqual(outfile.getvalue(), "\n\n\n")


if __name__ == "__main__":
    unittest.main()
