import unittest

from treelox.diagnostics import Report, Phase
from treelox.ontology import TokenKind
from treelox.scanner import scan_text
from treelox.front_end import parse_text
from treelox import syntax

def _scan(text):
	report = Report()
	return [t.kind for t in scan_text(text, report)], report

def _parse(text):
	report = Report()
	return parse_text(text, report), report

def _expression(text):
	statements, report = _parse(text)
	report.assert_no_issues("Expected %r to parse." % text)
	assert len(statements) == 1
	assert isinstance(statements[0], syntax.Expression)
	return statements[0].expr

class ScannerTests(unittest.TestCase):

	def test_operators(self):
		kinds, report = _scan("!= == <= >= ! = < > / *")
		assert report.ok()
		self.assertEqual([
			TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL, TokenKind.LESS_EQUAL, TokenKind.GREATER_EQUAL,
			TokenKind.BANG, TokenKind.EQUAL, TokenKind.LESS, TokenKind.GREATER,
			TokenKind.SLASH, TokenKind.STAR, TokenKind.EOF,
		], kinds)

	def test_keywords_are_whole_words(self):
		kinds, _ = _scan("or orchid class classy this")
		self.assertEqual([
			TokenKind.OR, TokenKind.IDENTIFIER, TokenKind.CLASS, TokenKind.IDENTIFIER, TokenKind.THIS, TokenKind.EOF,
		], kinds)

	def test_numbers(self):
		tokens = scan_text("12 3.25 7.", Report())
		self.assertEqual(12.0, tokens[0].literal)
		self.assertIsInstance(tokens[0].literal, float)
		self.assertEqual(3.25, tokens[1].literal)
		# A trailing dot is not part of the number.
		self.assertEqual([TokenKind.NUMBER, TokenKind.DOT], [t.kind for t in tokens[2:4]])

	def test_strings_and_lines(self):
		tokens = scan_text('"one\ntwo" // comment\nx', Report())
		self.assertEqual("one\ntwo", tokens[0].literal)
		self.assertEqual(TokenKind.IDENTIFIER, tokens[1].kind)
		self.assertEqual(3, tokens[1].line)
		self.assertEqual(3, tokens[-1].line)

	def test_no_escape_processing(self):
		tokens = scan_text(r'"a\nb"', Report())
		self.assertEqual(r"a\nb", tokens[0].literal)

	def test_scanner_keeps_going(self):
		kinds, report = _scan("a @ b # c")
		self.assertEqual([TokenKind.IDENTIFIER]*3 + [TokenKind.EOF], kinds)
		self.assertEqual(2, len(report.diagnostics))
		self.assertTrue(all(d.phase is Phase.LEXICAL for d in report.diagnostics))
		self.assertEqual("Unexpected character '@'.", report.diagnostics[0].message)

	def test_unterminated_string(self):
		kinds, report = _scan('print "oops\n;')
		self.assertEqual([TokenKind.PRINT, TokenKind.EOF], kinds)
		self.assertEqual("[line 2] Error: Unterminated string.", report.diagnostics[0].header())

class ParserTests(unittest.TestCase):

	def test_precedence(self):
		for text, expect in [
			("1 + 2 * 3;", "(+ <Literal 1.0> (* <Literal 2.0> <Literal 3.0>))"),
			("1 - 2 - 3;", "(- (- <Literal 1.0> <Literal 2.0>) <Literal 3.0>)"),
			("-a * b;", "(* (- a) b)"),
			("!!a;", "(! (! a))"),
			("a or b and c;", "(or a (and b c))"),
			("a == b < c;", "(== a (< b c))"),
			("(1 + 2) * 3;", "(* ((+ <Literal 1.0> <Literal 2.0>)) <Literal 3.0>)"),
			("a = b = c;", "(= a (= b c))"),
			("f(1)(2).g;", "(f(<Literal 1.0>)(<Literal 2.0>).g)"),
		]:
			with self.subTest(text):
				self.assertEqual(expect, str(_expression(text)))

	def test_operator_classes(self):
		self.assertIsInstance(_expression("a and b;"), syntax.Logical)
		self.assertIsInstance(_expression("a + b;"), syntax.BinExp)

	def test_assignment_targets(self):
		self.assertIsInstance(_expression("a = 1;"), syntax.Assign)
		it = _expression("a.b.c = 1;")
		self.assertIsInstance(it, syntax.Set)
		self.assertEqual("c", it.name.lexeme)
		self.assertIsInstance(it.obj, syntax.Get)

	def test_invalid_assignment_target(self):
		statements, report = _parse("a + b = c;\nprint 1;")
		self.assertIsNone(statements)
		# The parser is not confused, so there is exactly the one complaint.
		self.assertEqual(1, len(report.diagnostics))
		self.assertEqual("[line 1] Error at '=': Invalid assignment target.", report.diagnostics[0].header())

	def test_recovery_finds_several_errors(self):
		statements, report = _parse("var a = ;\nprint 1;\nvar = 3;\nprint 2;")
		self.assertIsNone(statements)
		self.assertEqual([1, 3], [d.line for d in report.diagnostics])
		self.assertEqual("[line 1] Error at ';': Expected expression.", report.diagnostics[0].header())
		self.assertEqual("Expected variable name.", report.diagnostics[1].message)

	def test_error_at_end(self):
		statements, report = _parse("print 1")
		self.assertIsNone(statements)
		self.assertEqual("[line 1] Error at end: Expected ';' after value.", report.diagnostics[0].header())

	def test_super_is_reserved(self):
		statements, report = _parse("print super.x;")
		self.assertIsNone(statements)
		self.assertEqual(" at 'super'", report.diagnostics[0].where)
		self.assertEqual("Expected expression.", report.diagnostics[0].message)

	def test_for_loop_desugars(self):
		statements, report = _parse("for (var i = 0; i < 3; i = i + 1) print i;")
		report.assert_no_issues("for-loop")
		outer, = statements
		self.assertIsInstance(outer, syntax.Block)
		init, loop = outer.statements
		self.assertIsInstance(init, syntax.Var)
		self.assertIsInstance(loop, syntax.While)
		self.assertEqual("(< i <Literal 3.0>)", str(loop.condition))
		self.assertIsInstance(loop.body, syntax.Block)
		body, step = loop.body.statements
		self.assertIsInstance(body, syntax.Print)
		self.assertIsInstance(step.expr, syntax.Assign)

	def test_bare_for_loop(self):
		statements, report = _parse("for (;;) print 1;")
		report.assert_no_issues("bare for-loop")
		loop, = statements
		self.assertIsInstance(loop, syntax.While)
		self.assertIs(True, loop.condition.value)
		self.assertIsInstance(loop.body, syntax.Print)

	def test_class_declaration(self):
		statements, report = _parse("class A { init(x) { this.x = x; } show() { print this.x; } }")
		report.assert_no_issues("class")
		klass, = statements
		self.assertEqual(["init", "show"], list(klass.method_space))
		self.assertEqual(1, len(klass.method_space["init"].params))

	def test_argument_limit(self):
		fine = "f(%s);" % ", ".join(["1"]*255)
		_, report = _parse(fine)
		self.assertTrue(report.ok())
		statements, report = _parse("f(%s);" % ", ".join(["1"]*256))
		self.assertIsNone(statements)
		self.assertEqual(["Can't have more than 255 arguments."], [d.message for d in report.diagnostics])

	def test_parameter_limit(self):
		params = ", ".join("p%d" % i for i in range(256))
		statements, report = _parse("fun f(%s) {}" % params)
		self.assertIsNone(statements)
		self.assertEqual(["Can't have more than 255 parameters."], [d.message for d in report.diagnostics])
		self.assertEqual(" at 'p255'", report.diagnostics[0].where)

	def test_deep_nesting_is_reported(self):
		statements, report = _parse("print " + "("*2000 + "1" + ")"*2000 + ";")
		self.assertIsNone(statements)
		d, = report.diagnostics
		self.assertIs(Phase.SYNTAX, d.phase)
		self.assertEqual("Program is nested too deeply.", d.message)

	def test_empty_program(self):
		statements, report = _parse("// nothing here\n")
		self.assertEqual([], statements)
		self.assertTrue(report.ok())


if __name__ == '__main__':
	unittest.main()
