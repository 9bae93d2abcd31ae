"""
The driver: scanner, parser, resolver, and then interpreter, in that order,
stopping short of interpretation if any earlier phase reported trouble.

One Session owns one global environment. A REPL feeds every entry to the
same Session, so definitions from one entry are visible to the next.
"""
from enum import Enum
from typing import Callable, Optional
from .ontology import Stmt
from .diagnostics import Report
from .front_end import parse_text
from .resolution import resolve_statements, Yuck
from .primitive import root_names
from .tree_walker.executive import Interpreter

class Outcome(Enum):
	CLEAN = 0
	STATIC_FAILURE = 65   # Lexical, syntax, or static error: nothing ran.
	RUNTIME_FAILURE = 70  # Something ran, then a run-time error stopped it.

class Session:
	def __init__(self, report:Optional[Report]=None, emit:Callable[[str], None]=print):
		self.report = Report() if report is None else report
		self.interpreter = Interpreter(emit)
		self._known_globals = root_names()

	def _resolve(self, text:str) -> tuple[list[Stmt], set[str]]:
		statements = parse_text(text, self.report)
		if statements is None:
			raise Yuck("parse")
		known = set(self._known_globals)
		resolve_statements(statements, self.report, known)
		return statements, known

	def prepare(self, text:str, commit:bool=True) -> list[Stmt]:
		""" Scan, parse, and resolve, or else raise Yuck naming the phase that failed. """
		statements, known = self._resolve(text)
		if commit: self._known_globals = known
		return statements

	def check(self, text:str) -> Outcome:
		self.report.reset()
		try: self.prepare(text, commit=False)
		except Yuck: return Outcome.STATIC_FAILURE
		return Outcome.CLEAN

	def run(self, text:str) -> Outcome:
		self.report.reset()
		try: statements, known = self._resolve(text)
		except Yuck: return Outcome.STATIC_FAILURE
		self.report.info("Resolved %d top-level statement(s)." % len(statements))
		clean = self.interpreter.interpret(statements, self.report)
		# A run cut short never bound the declarations after the error.
		self._known_globals = {name for name in known if name in self.interpreter.globals}
		return Outcome.CLEAN if clean else Outcome.RUNTIME_FAILURE
