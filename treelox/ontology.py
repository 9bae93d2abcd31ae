"""
These most-fundamental classes are separate from the rest
to avoid various circular-import scenarios. The scanner makes tokens,
the parser makes phrases out of them, and every later pass only ever
needs a token to say where in the source something went wrong.
"""
from enum import Enum, auto
from typing import NamedTuple, Any

class TokenKind(Enum):
	# Punctuation
	LEFT_PAREN = auto()
	RIGHT_PAREN = auto()
	LEFT_BRACE = auto()
	RIGHT_BRACE = auto()
	COMMA = auto()
	DOT = auto()
	MINUS = auto()
	PLUS = auto()
	SEMICOLON = auto()
	SLASH = auto()
	STAR = auto()

	# One or two character operators
	BANG = auto()
	BANG_EQUAL = auto()
	EQUAL = auto()
	EQUAL_EQUAL = auto()
	GREATER = auto()
	GREATER_EQUAL = auto()
	LESS = auto()
	LESS_EQUAL = auto()

	# Literals
	IDENTIFIER = auto()
	STRING = auto()
	NUMBER = auto()

	# Keywords
	AND = auto()
	CLASS = auto()
	ELSE = auto()
	FALSE = auto()
	FUN = auto()
	FOR = auto()
	IF = auto()
	NIL = auto()
	OR = auto()
	PRINT = auto()
	RETURN = auto()
	SUPER = auto()
	THIS = auto()
	TRUE = auto()
	VAR = auto()
	WHILE = auto()

	EOF = auto()

KEYWORDS = {
	kind.name.lower(): kind
	for kind in (
		TokenKind.AND, TokenKind.CLASS, TokenKind.ELSE, TokenKind.FALSE,
		TokenKind.FUN, TokenKind.FOR, TokenKind.IF, TokenKind.NIL,
		TokenKind.OR, TokenKind.PRINT, TokenKind.RETURN, TokenKind.SUPER,
		TokenKind.THIS, TokenKind.TRUE, TokenKind.VAR, TokenKind.WHILE,
	)
}

class Token(NamedTuple):
	""" Immutable once the scanner produces it. """
	kind: TokenKind
	lexeme: str
	literal: Any
	line: int
	start: int = 0  # Offset into the source text, for illustrating problems.

	def __repr__(self): return "<%s %r @%d>" % (self.kind.name, self.lexeme, self.line)

def synthetic(kind:TokenKind, lexeme:str, line:int) -> Token:
	""" For desugaring: a token which nobody actually typed. """
	return Token(kind, lexeme, None, line)

class Phrase:
	def head(self) -> Token:
		""" Return the token most worth blaming when this phrase goes wrong """
		raise NotImplementedError(type(self))
	def line(self) -> int: return self.head().line

class Expr(Phrase): pass

class Stmt(Phrase): pass

class Nesting(Enum):
	"""
	The one list of constructs that open a new lexical scope.
	The resolver pushes a static scope for exactly these,
	and the run-time creates a child environment for exactly these,
	so the distances computed by the one are walked by the other.
	"""
	BLOCK = "block"        # Each { ... } statement list.
	CALL = "call"          # Parameters and body of a function share one scope per call.
	RECEIVER = "receiver"  # Wraps each method, binding only the receiver.

THIS = "this"
INITIALIZER = "init"
MAXIMUM_ARGUMENTS = 255

class LoxRuntimeError(Exception):
	""" Unwinds the whole of the current run; never caught by the program itself. """
	def __init__(self, token:Token, message:str):
		super().__init__(message)
		self.token = token
		self.message = message
