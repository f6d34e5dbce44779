from pathlib import Path
import unittest

from nega.coherence import check, CheckAborted
from nega.front_end import parse_file
from nega.ontology import CoherenceError

from support import Silence

base_folder = Path(__file__).parent.parent
zoo_fail = base_folder/"zoo/fail"

def _identify_problem(folder:Path, filename:str):
	specimen_path = folder / filename
	assert specimen_path.exists(), specimen_path
	report = Silence()
	program = parse_file(specimen_path, report)
	if program is None:
		assert 0 == report.complain_to_console.call_count
		assert report.sick()
		return "parse"
	report.assert_no_issues("Parsed, yet complained anyway.")
	try:
		check(program, report)
	except CheckAborted as ex:
		return type(ex.cause).__name__
	except CoherenceError as ex:
		return type(ex).__name__
	else:
		return "failed to fail"

class ZooOfFail(unittest.TestCase):
	""" Tests that assert about failure modes. """

	def expect(self, problem, cases):
		for basename in cases:
			with self.subTest(basename):
				self.assertEqual(problem, _identify_problem(zoo_fail, basename + ".nega"))

	def test_00_syntax_error(self):
		self.expect("parse", (
			"syntax_error",
			"unterminated",
		))

	def test_01_undefined_symbol(self):
		self.expect("UndefinedSymbolError", ["undefined_symbol"])

	def test_02_arity(self):
		self.expect("ArityError", ["wrong_arity"])

	def test_03_undeclared_trait(self):
		self.expect("UndeclaredTraitError", ["undeclared_trait"])

	def test_04_cyclic_supertraits(self):
		self.expect("CyclicSupertraitError", ["cyclic_supertraits"])

	def test_05_missing_file(self):
		report = Silence()
		self.assertIsNone(parse_file(zoo_fail/"no_such_specimen.nega", report))
		self.assertTrue(report.issues()[0].intro().startswith("I see no file"))

if __name__ == '__main__':
	unittest.main()
