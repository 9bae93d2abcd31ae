from pathlib import Path
import unittest
from unittest import mock

from treelox.diagnostics import Report, Phase
from treelox.resolution import Yuck
from treelox.session import Session

class Silence(Report):
	def __init__(self):
		super().__init__(verbose=False, max_issues=30)
		self.complain_to_console = mock.Mock()
	pass

base_folder = Path(__file__).parent.parent
zoo_fail = base_folder/"zoo/fail"

def _identify_problem(folder:Path, filename:str):
	specimen_path = folder / filename
	assert specimen_path.exists(), specimen_path
	report = Silence()
	output = []
	session = Session(report, emit=output.append)
	try:
		statements = session.prepare(specimen_path.read_text(encoding="utf-8"))
	except Yuck as ex:
		assert 0 == report.complain_to_console.call_count
		assert report.sick()
		assert not output
		return ex.args[0]
	else:
		report.assert_no_issues("Static phases failed to fail properly.")
		if session.interpreter.interpret(statements, report): return "failed to fail"
		assert report.sick_in(Phase.RUNTIME)
		return "runtime"

class ZooOfFail(unittest.TestCase):
	""" Tests that assert about failure modes. """

	def expect(self, folder, cases):
		for basename in cases:
			with self.subTest(basename):
				self.assertEqual(folder, _identify_problem(zoo_fail / folder, basename + ".lox"))

	def test_00_parse(self):
		self.expect("parse", [
			"two_errors",
			"bad_assignment",
			"unexpected_character",
			"unterminated_string",
			"super_is_reserved",
		])

	def test_01_resolve(self):
		self.expect("resolve", [
			"own_initializer",
			"global_own_initializer",
			"top_level_return",
			"this_outside_class",
			"duplicate_local",
			"duplicate_parameter",
		])

	def test_02_runtime(self):
		self.expect("runtime", [
			"division_by_zero",
			"arity",
			"undefined_variable",
			"not_callable",
			"type_mismatch",
			"undefined_property",
			"property_of_non_instance",
			"compare_strings",
			"negate_string",
			"class_arity",
		])

	def test_every_specimen_is_covered(self):
		# A new specimen dropped into the zoo should not go unexamined.
		for folder in zoo_fail.iterdir():
			with self.subTest(folder.name):
				for path in folder.glob("*.lox"):
					self.assertEqual(folder.name, _identify_problem(folder, path.name))


if __name__ == '__main__':
	unittest.main()
