from contextlib import redirect_stdout, redirect_stderr
from pathlib import Path
import io
import unittest

from treelox import cmdline

base_folder = Path(__file__).parent.parent

def _exit_code(*argv):
	args = cmdline.parser.parse_args(list(argv) + ["--recursion-limit", "100"])
	out, err = io.StringIO(), io.StringIO()
	with redirect_stdout(out), redirect_stderr(err):
		return cmdline.run(args)

class CommandLineTests(unittest.TestCase):

	def test_exit_codes(self):
		for relative, code in [
			("examples/hello_world.lox", 0),
			("zoo/fail/parse/two_errors.lox", 65),
			("zoo/fail/resolve/top_level_return.lox", 65),
			("zoo/fail/runtime/division_by_zero.lox", 70),
		]:
			with self.subTest(relative):
				self.assertEqual(code, _exit_code(str(base_folder/relative)))

	def test_check_does_not_run(self):
		self.assertEqual(0, _exit_code("--check", str(base_folder/"zoo/fail/runtime/division_by_zero.lox")))

	def test_missing_file(self):
		self.assertEqual(cmdline.EX_USAGE, _exit_code(str(base_folder/"no_such_program.lox")))

	def test_max_issues(self):
		self.assertEqual(65, _exit_code("--max-issues", "1", str(base_folder/"zoo/fail/parse/two_errors.lox")))

	def test_max_issues_at_run_time(self):
		self.assertEqual(70, _exit_code("--max-issues", "1", str(base_folder/"zoo/fail/runtime/division_by_zero.lox")))


if __name__ == '__main__':
	unittest.main()
