"""
Lexical analysis: one left-to-right pass over the source text.
Trouble gets reported and skipped so that a single scan can surface
more than one problem. The parser does not care: it just sees fewer tokens.
"""
from .ontology import Token, TokenKind, KEYWORDS
from .diagnostics import Report

_SINGLE = {
	"(": TokenKind.LEFT_PAREN,
	")": TokenKind.RIGHT_PAREN,
	"{": TokenKind.LEFT_BRACE,
	"}": TokenKind.RIGHT_BRACE,
	",": TokenKind.COMMA,
	".": TokenKind.DOT,
	"-": TokenKind.MINUS,
	"+": TokenKind.PLUS,
	";": TokenKind.SEMICOLON,
	"*": TokenKind.STAR,
}

# Operators which might be followed by "=" to make a different operator.
_DOUBLE = {
	"!": (TokenKind.BANG, TokenKind.BANG_EQUAL),
	"=": (TokenKind.EQUAL, TokenKind.EQUAL_EQUAL),
	"<": (TokenKind.LESS, TokenKind.LESS_EQUAL),
	">": (TokenKind.GREATER, TokenKind.GREATER_EQUAL),
}

_BLANK = " \r\t"

def _is_digit(c:str) -> bool:
	return "0" <= c <= "9"

def _is_alpha(c:str) -> bool:
	return c.isalpha() or c == "_"

def _is_alphanumeric(c:str) -> bool:
	return _is_alpha(c) or _is_digit(c)

class Scanner:
	tokens: list[Token]

	def __init__(self, source:str, report:Report):
		self._source = source
		self._report = report
		self.tokens = []
		self._start = 0
		self._current = 0
		self._line = 1

	def scan_tokens(self) -> list[Token]:
		while not self._at_end():
			self._start = self._current
			self._scan_token()
		self.tokens.append(Token(TokenKind.EOF, "", None, self._line, len(self._source)))
		return self.tokens

	def _at_end(self) -> bool:
		return self._current >= len(self._source)

	def _advance(self) -> str:
		c = self._source[self._current]
		self._current += 1
		return c

	def _match(self, expected:str) -> bool:
		if self._at_end() or self._source[self._current] != expected:
			return False
		self._current += 1
		return True

	def _peek(self) -> str:
		return "\0" if self._at_end() else self._source[self._current]

	def _peek_next(self) -> str:
		at = self._current + 1
		return "\0" if at >= len(self._source) else self._source[at]

	def _add_token(self, kind:TokenKind, literal=None):
		text = self._source[self._start:self._current]
		self.tokens.append(Token(kind, text, literal, self._line, self._start))

	def _scan_token(self):
		c = self._advance()
		if c in _SINGLE: self._add_token(_SINGLE[c])
		elif c in _DOUBLE:
			plain, fancy = _DOUBLE[c]
			self._add_token(fancy if self._match("=") else plain)
		elif c == "/":
			if self._match("/"):
				while self._peek() != "\n" and not self._at_end():
					self._advance()
			else:
				self._add_token(TokenKind.SLASH)
		elif c in _BLANK: pass
		elif c == "\n": self._line += 1
		elif c == '"': self._string()
		elif _is_digit(c): self._number()
		elif _is_alpha(c): self._identifier()
		else:
			self._report.unexpected_character(self._line, self._start, c)

	def _string(self):
		while self._peek() != '"' and not self._at_end():
			if self._peek() == "\n": self._line += 1
			self._advance()
		if self._at_end():
			self._report.unterminated_string(self._line, self._start)
			return
		self._advance()  # The closing quote.
		self._add_token(TokenKind.STRING, self._source[self._start + 1:self._current - 1])

	def _number(self):
		while _is_digit(self._peek()): self._advance()
		if self._peek() == "." and _is_digit(self._peek_next()):
			self._advance()
			while _is_digit(self._peek()): self._advance()
		self._add_token(TokenKind.NUMBER, float(self._source[self._start:self._current]))

	def _identifier(self):
		while _is_alphanumeric(self._peek()): self._advance()
		text = self._source[self._start:self._current]
		self._add_token(KEYWORDS.get(text, TokenKind.IDENTIFIER))

def scan_text(text:str, report:Report) -> list[Token]:
	return Scanner(text, report).scan_tokens()
