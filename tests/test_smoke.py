from pathlib import Path
import unittest

from treelox.diagnostics import Report
from treelox.session import Session, Outcome

base_folder = Path(__file__).parent.parent
examples = base_folder/"examples"
zoo_ok = base_folder/"zoo/ok"

EXPECT = "// expect: "

def _expectations(text:str) -> list[str]:
	return [
		line.split(EXPECT, 1)[1].rstrip()
		for line in text.splitlines()
		if EXPECT in line
	]

def _good(path:Path) -> list[str]:
	text = path.read_text(encoding="utf-8")
	output = []
	report = Report(verbose=False)
	outcome = Session(report, emit=output.append).run(text)
	report.assert_no_issues("Ostensibly-good program %s failed to run cleanly." % path.name)
	assert outcome is Outcome.CLEAN, outcome
	return output

class ExampleSmokeTests(unittest.TestCase):
	""" Run all the examples; Test for no smoke, and for the right output. """

	def check_folder(self, folder:Path):
		specimens = sorted(folder.glob("*.lox"))
		assert specimens, folder
		for path in specimens:
			with self.subTest(path.name):
				expected = _expectations(path.read_text(encoding="utf-8"))
				self.assertEqual(expected, _good(path))

	def test_examples(self):
		self.check_folder(examples)

	def test_zoo_of_ok(self):
		self.check_folder(zoo_ok)


if __name__ == '__main__':
	unittest.main()
