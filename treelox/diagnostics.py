"""
The diagnostic sink. Every phase reports its troubles here instead of
printing them, so a host can decide what to do about them. Each phase
keeps going after trouble as far as it sensibly can, so one run may
accumulate several diagnostics.
"""
import sys, random
from enum import Enum
from typing import NamedTuple, Optional
from boozetools.support.failureprone import SourceText, illustration

from .ontology import Token, TokenKind

class TooManyIssues(Exception):
	pass

class Phase(Enum):
	LEXICAL = "lexical"
	SYNTAX = "syntax"
	STATIC = "static"
	RUNTIME = "runtime"
	RESOURCE = "resource"

# Any of these means interpretation must not start.
BEFORE_RUNNING = (Phase.LEXICAL, Phase.SYNTAX, Phase.STATIC)

class Diagnostic(NamedTuple):
	phase: Phase
	message: str
	line: int
	where: str = ""
	start: Optional[int] = None  # Offset into the source, when known.
	width: int = 1

	def header(self) -> str:
		if self.phase in (Phase.RUNTIME, Phase.RESOURCE):
			return "[line %d] Runtime Error%s: %s" % (self.line, self.where, self.message)
		return "[line %d] Error%s: %s" % (self.line, self.where, self.message)

def _outburst():
	particle = ["Oh, ", "Well, ", "Hmm. ", "", ""]
	exclamations = [
		'Blast', 'Bother', 'Crumbs', 'Drat', 'Egad', 'Fiddlesticks',
		'Good Grief', 'Gosh', 'Heavens', 'Jeepers', 'Nuts', 'Phooey',
		'Rats', 'Shucks', 'Whoops', 'Yikes', 'Zounds',
	]
	resignations = [
		'This program will not run.',
		'I cannot make sense of it.',
		'Something needs fixing first.',
		'Better luck next time.',
	]
	return "%s%s! %s" % tuple(map(random.choice, (particle, exclamations, resignations)))

def _where(token:Token) -> str:
	if token.kind is TokenKind.EOF: return " at end"
	return " at '%s'" % token.lexeme

class Report:
	""" Collects diagnostics in the order they happen. """
	diagnostics: list[Diagnostic]

	_source: Optional[SourceText]

	def __init__(self, *, verbose:int=0, max_issues:Optional[int]=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._max_issues = max_issues
		self.diagnostics = []
		self._source = None

	def ok(self): return not self.diagnostics
	def sick(self): return bool(self.diagnostics)

	def sick_in(self, *phases:Phase) -> bool:
		return any(d.phase in phases for d in self.diagnostics)

	def reset(self):
		self.diagnostics.clear()

	def attend(self, text:str, filename:Optional[str]=None):
		""" The source text subsequent diagnostics refer to. """
		self._source = SourceText(text, filename=filename)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def issue(self, it:Diagnostic):
		self.diagnostics.append(it)
		if self._max_issues is not None and len(self.diagnostics) == self._max_issues:
			raise TooManyIssues(self)

	def _on_token(self, phase:Phase, token:Token, message:str):
		self.issue(Diagnostic(phase, message, token.line, _where(token), token.start, max(1, len(token.lexeme))))

	# Methods the scanner calls:
	def unexpected_character(self, line:int, start:int, char:str):
		self.issue(Diagnostic(Phase.LEXICAL, "Unexpected character '%s'." % char, line, "", start))

	def unterminated_string(self, line:int, start:int):
		self.issue(Diagnostic(Phase.LEXICAL, "Unterminated string.", line, "", start))

	# Methods the parser calls:
	def parse_error(self, token:Token, message:str):
		self._on_token(Phase.SYNTAX, token, message)

	# The parser and the resolver both recurse on nesting, and either may run out of host stack:
	def too_deeply_nested(self, phase:Phase, token:Token):
		self._on_token(phase, token, "Program is nested too deeply.")

	# Methods the resolver calls:
	def own_initializer(self, name:Token):
		self._on_token(Phase.STATIC, name, "Can't read local variable in its own initializer.")

	def redefined(self, name:Token, first:Optional[Token]):
		self._on_token(Phase.STATIC, name, "Already a variable with this name in this scope.")
		if first is not None:
			self.info("  (first declared on line %d)" % first.line)

	def return_at_top_level(self, keyword:Token):
		self._on_token(Phase.STATIC, keyword, "Can't return from top-level code.")

	def this_outside_class(self, keyword:Token):
		self._on_token(Phase.STATIC, keyword, "Can't use 'this' outside of a class.")

	# Methods the run-time executive calls:
	def runtime_error(self, token:Token, message:str):
		self._on_token(Phase.RUNTIME, token, message)

	def stack_overflow(self, token:Optional[Token]):
		if token is None:
			self.issue(Diagnostic(Phase.RESOURCE, "Stack overflow.", 0))
		else:
			self._on_token(Phase.RESOURCE, token, "Stack overflow.")

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		if self.diagnostics:
			print("*"*60, file=sys.stderr)
			print(_outburst(), file=sys.stderr)
		for d in self.diagnostics:
			print("  -"*20, file=sys.stderr)
			print(self.as_text(d), file=sys.stderr)
		sys.stderr.flush()

	def as_text(self, d:Diagnostic) -> str:
		if d.start is None or self._source is None:
			return d.header()
		row, col = self._source.find_row_col(d.start)
		single_line = self._source.line_of_text(row)
		picture = illustration(single_line, col, d.width, prefix='% 6d |' % d.line, caption="")
		return d.header() + "\n" + picture

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self.diagnostics:
			self.complain_to_console()
			raise AssertionError(_outburst() + " " + message)
