"""
Recursive descent, one method per grammar rule.
Expressions go by precedence climbing, lowest to highest:

	assignment -> or -> and -> equality -> comparison -> term -> factor -> unary -> call -> primary

On a syntax error, the parser reports it and then discards tokens up to
the next likely statement boundary before carrying on. That way one parse
can find several independent mistakes. If any mistake turns up, the caller
gets no tree at all.
"""
from typing import Optional, Sequence
from .ontology import Token, TokenKind, Expr, Stmt, synthetic, MAXIMUM_ARGUMENTS
from .diagnostics import Report, Phase, BEFORE_RUNNING
from .scanner import scan_text
from . import syntax

class ParseError(Exception):
	""" Internal to the parser: unwinds to the nearest declaration, which synchronizes. """

# Keywords which begin a statement, and hence a fresh start after an error.
_STATEMENT_STARTERS = frozenset([
	TokenKind.CLASS, TokenKind.FUN, TokenKind.VAR, TokenKind.FOR,
	TokenKind.IF, TokenKind.WHILE, TokenKind.PRINT, TokenKind.RETURN,
])

_EQUALITY = (TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL)
_COMPARISON = (TokenKind.GREATER, TokenKind.GREATER_EQUAL, TokenKind.LESS, TokenKind.LESS_EQUAL)
_TERM = (TokenKind.MINUS, TokenKind.PLUS)
_FACTOR = (TokenKind.SLASH, TokenKind.STAR)
_UNARY = (TokenKind.BANG, TokenKind.MINUS)

_LITERAL_KEYWORDS = {
	TokenKind.FALSE: False,
	TokenKind.TRUE: True,
	TokenKind.NIL: None,
}

class Parser:
	def __init__(self, tokens: Sequence[Token], report: Report):
		assert tokens and tokens[-1].kind is TokenKind.EOF
		self._tokens = tokens
		self._report = report
		self._current = 0

	def parse(self) -> list[Stmt]:
		statements = []
		try:
			while not self._at_end():
				stmt = self._declaration()
				if stmt is not None:
					statements.append(stmt)
		except RecursionError:
			# No telling where the next sound statement begins, so stop here.
			self._report.too_deeply_nested(Phase.SYNTAX, self._peek())
		return statements

	###########################################################################
	# Token-stream primitives

	def _peek(self) -> Token: return self._tokens[self._current]
	def _previous(self) -> Token: return self._tokens[self._current - 1]
	def _at_end(self) -> bool: return self._peek().kind is TokenKind.EOF

	def _check(self, kind: TokenKind) -> bool:
		return self._peek().kind is kind

	def _advance(self) -> Token:
		if not self._at_end(): self._current += 1
		return self._previous()

	def _match(self, *kinds: TokenKind) -> bool:
		if self._peek().kind in kinds:
			self._advance()
			return True
		return False

	def _consume(self, kind: TokenKind, message: str) -> Token:
		if self._check(kind): return self._advance()
		raise self._error(self._peek(), message)

	def _error(self, token: Token, message: str) -> ParseError:
		self._report.parse_error(token, message)
		return ParseError()

	def _synchronize(self):
		self._advance()
		while not self._at_end():
			if self._previous().kind is TokenKind.SEMICOLON: return
			if self._peek().kind in _STATEMENT_STARTERS: return
			self._advance()

	###########################################################################
	# Declarations and statements

	def _declaration(self) -> Optional[Stmt]:
		try:
			if self._match(TokenKind.CLASS): return self._class_declaration()
			if self._match(TokenKind.FUN): return self._function("function")
			if self._match(TokenKind.VAR): return self._var_declaration()
			return self._statement()
		except ParseError:
			self._synchronize()
			return None

	def _class_declaration(self) -> syntax.Class:
		name = self._consume(TokenKind.IDENTIFIER, "Expected class name.")
		self._consume(TokenKind.LEFT_BRACE, "Expected '{' before class body.")
		methods = []
		while not self._check(TokenKind.RIGHT_BRACE) and not self._at_end():
			methods.append(self._function("method"))
		self._consume(TokenKind.RIGHT_BRACE, "Expected '}' after class body.")
		return syntax.Class(name, methods)

	def _function(self, kind: str) -> syntax.Function:
		name = self._consume(TokenKind.IDENTIFIER, "Expected %s name." % kind)
		self._consume(TokenKind.LEFT_PAREN, "Expected '(' after %s name." % kind)
		params = []
		if not self._check(TokenKind.RIGHT_PAREN):
			while True:
				if len(params) >= MAXIMUM_ARGUMENTS:
					# Reported, but the parser is not confused, so no need to synchronize.
					self._error(self._peek(), "Can't have more than %d parameters." % MAXIMUM_ARGUMENTS)
				params.append(self._consume(TokenKind.IDENTIFIER, "Expected parameter name."))
				if not self._match(TokenKind.COMMA): break
		self._consume(TokenKind.RIGHT_PAREN, "Expected ')' after parameters.")
		self._consume(TokenKind.LEFT_BRACE, "Expected '{' before %s body." % kind)
		return syntax.Function(name, params, self._block())

	def _var_declaration(self) -> syntax.Var:
		name = self._consume(TokenKind.IDENTIFIER, "Expected variable name.")
		initializer = self._expression() if self._match(TokenKind.EQUAL) else None
		self._consume(TokenKind.SEMICOLON, "Expected ';' after variable declaration.")
		return syntax.Var(name, initializer)

	def _statement(self) -> Stmt:
		if self._match(TokenKind.FOR): return self._for_statement()
		if self._match(TokenKind.IF): return self._if_statement()
		if self._match(TokenKind.PRINT): return self._print_statement()
		if self._match(TokenKind.RETURN): return self._return_statement()
		if self._match(TokenKind.WHILE): return self._while_statement()
		if self._match(TokenKind.LEFT_BRACE):
			brace = self._previous()
			return syntax.Block(brace, self._block())
		return self._expression_statement()

	def _for_statement(self) -> Stmt:
		"""
		There is no for-loop at run-time. It becomes:
			{ init; while (cond) { body; increment; } }
		"""
		keyword = self._previous()
		self._consume(TokenKind.LEFT_PAREN, "Expected '(' after 'for'.")
		if self._match(TokenKind.SEMICOLON): initializer = None
		elif self._match(TokenKind.VAR): initializer = self._var_declaration()
		else: initializer = self._expression_statement()

		if self._check(TokenKind.SEMICOLON):
			condition = syntax.Literal(True, synthetic(TokenKind.TRUE, "true", keyword.line))
		else:
			condition = self._expression()
		self._consume(TokenKind.SEMICOLON, "Expected ';' after loop condition.")

		increment = None if self._check(TokenKind.RIGHT_PAREN) else self._expression()
		self._consume(TokenKind.RIGHT_PAREN, "Expected ')' after for clauses.")

		body = self._statement()
		if increment is not None:
			body = syntax.Block(keyword, [body, syntax.Expression(increment)])
		body = syntax.While(keyword, condition, body)
		if initializer is not None:
			body = syntax.Block(keyword, [initializer, body])
		return body

	def _if_statement(self) -> syntax.If:
		keyword = self._previous()
		self._consume(TokenKind.LEFT_PAREN, "Expected '(' after 'if'.")
		condition = self._expression()
		self._consume(TokenKind.RIGHT_PAREN, "Expected ')' after if condition.")
		then_branch = self._statement()
		else_branch = self._statement() if self._match(TokenKind.ELSE) else None
		return syntax.If(keyword, condition, then_branch, else_branch)

	def _print_statement(self) -> syntax.Print:
		keyword = self._previous()
		value = self._expression()
		self._consume(TokenKind.SEMICOLON, "Expected ';' after value.")
		return syntax.Print(keyword, value)

	def _return_statement(self) -> syntax.Return:
		keyword = self._previous()
		value = None if self._check(TokenKind.SEMICOLON) else self._expression()
		self._consume(TokenKind.SEMICOLON, "Expected ';' after return value.")
		return syntax.Return(keyword, value)

	def _while_statement(self) -> syntax.While:
		keyword = self._previous()
		self._consume(TokenKind.LEFT_PAREN, "Expected '(' after 'while'.")
		condition = self._expression()
		self._consume(TokenKind.RIGHT_PAREN, "Expected ')' after condition.")
		return syntax.While(keyword, condition, self._statement())

	def _block(self) -> list[Stmt]:
		statements = []
		while not self._check(TokenKind.RIGHT_BRACE) and not self._at_end():
			stmt = self._declaration()
			if stmt is not None:
				statements.append(stmt)
		self._consume(TokenKind.RIGHT_BRACE, "Expected '}' after block.")
		return statements

	def _expression_statement(self) -> syntax.Expression:
		expr = self._expression()
		self._consume(TokenKind.SEMICOLON, "Expected ';' after expression.")
		return syntax.Expression(expr)

	###########################################################################
	# Expressions

	def _expression(self) -> Expr:
		return self._assignment()

	def _assignment(self) -> Expr:
		expr = self._or()
		if self._match(TokenKind.EQUAL):
			equals = self._previous()
			value = self._assignment()  # Right-associative.
			if isinstance(expr, syntax.Variable):
				return syntax.Assign(expr.name, value)
			if isinstance(expr, syntax.Get):
				return syntax.Set(expr.obj, expr.name, value)
			# Reported, but the parser is not confused, so no need to synchronize.
			self._error(equals, "Invalid assignment target.")
		return expr

	def _or(self) -> Expr:
		expr = self._and()
		while self._match(TokenKind.OR):
			op = self._previous()
			expr = syntax.Logical(expr, op, self._and())
		return expr

	def _and(self) -> Expr:
		expr = self._equality()
		while self._match(TokenKind.AND):
			op = self._previous()
			expr = syntax.Logical(expr, op, self._equality())
		return expr

	def _left_associative(self, operand, kinds) -> Expr:
		expr = operand()
		while self._match(*kinds):
			op = self._previous()
			expr = syntax.BinExp(expr, op, operand())
		return expr

	def _equality(self) -> Expr: return self._left_associative(self._comparison, _EQUALITY)
	def _comparison(self) -> Expr: return self._left_associative(self._term, _COMPARISON)
	def _term(self) -> Expr: return self._left_associative(self._factor, _TERM)
	def _factor(self) -> Expr: return self._left_associative(self._unary, _FACTOR)

	def _unary(self) -> Expr:
		if self._match(*_UNARY):
			op = self._previous()
			return syntax.Unary(op, self._unary())
		return self._call()

	def _call(self) -> Expr:
		expr = self._primary()
		while True:
			if self._match(TokenKind.LEFT_PAREN):
				expr = self._finish_call(expr)
			elif self._match(TokenKind.DOT):
				name = self._consume(TokenKind.IDENTIFIER, "Expected property name after '.'.")
				expr = syntax.Get(expr, name)
			else:
				return expr

	def _finish_call(self, callee: Expr) -> syntax.Call:
		args = []
		if not self._check(TokenKind.RIGHT_PAREN):
			while True:
				if len(args) >= MAXIMUM_ARGUMENTS:
					self._error(self._peek(), "Can't have more than %d arguments." % MAXIMUM_ARGUMENTS)
				args.append(self._expression())
				if not self._match(TokenKind.COMMA): break
		paren = self._consume(TokenKind.RIGHT_PAREN, "Expected ')' after arguments.")
		return syntax.Call(callee, paren, args)

	def _primary(self) -> Expr:
		token = self._peek()
		if token.kind in _LITERAL_KEYWORDS:
			self._advance()
			return syntax.Literal(_LITERAL_KEYWORDS[token.kind], token)
		if self._match(TokenKind.NUMBER, TokenKind.STRING):
			return syntax.Literal(token.literal, token)
		if self._match(TokenKind.THIS):
			return syntax.This(token)
		if self._match(TokenKind.IDENTIFIER):
			return syntax.Variable(token)
		if self._match(TokenKind.LEFT_PAREN):
			inner = self._expression()
			self._consume(TokenKind.RIGHT_PAREN, "Expected ')' after expression.")
			return syntax.Grouping(inner, token)
		raise self._error(token, "Expected expression.")

def parse_tokens(tokens: Sequence[Token], report: Report) -> Optional[list[Stmt]]:
	statements = Parser(tokens, report).parse()
	if report.sick_in(*BEFORE_RUNNING):
		return None
	return statements

def parse_text(text: str, report: Report) -> Optional[list[Stmt]]:
	""" Scan and parse; None if anything at all went wrong. """
	report.attend(text)
	return parse_tokens(scan_text(text, report), report)
