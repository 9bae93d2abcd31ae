"""
The set of parse-nodes in simple form.
The parser calls these constructors as it recognizes each rule.
Class-level type annotations make peace with pycharm wherever later passes add fields.
"""
from typing import Optional, Any, Sequence
from .ontology import Token, Expr, Stmt, Nesting

###############################################################################
# Expressions

class Literal(Expr):
	def __init__(self, value: Any, token: Token):
		self.value, self._token = value, token
	def __str__(self): return "<Literal %r>" % self.value
	def head(self): return self._token

class Grouping(Expr):
	def __init__(self, inner: Expr, paren: Token):
		self.inner, self._paren = inner, paren
	def __str__(self): return "(%s)" % self.inner
	def head(self): return self._paren

class Unary(Expr):
	def __init__(self, op: Token, arg: Expr):
		self.op, self.arg = op, arg
	def __str__(self): return "(%s %s)" % (self.op.lexeme, self.arg)
	def head(self): return self.op

class Binary(Expr):
	def __init__(self, lhs: Expr, op: Token, rhs: Expr):
		self.lhs, self.op, self.rhs = lhs, op, rhs
	def __str__(self): return "(%s %s %s)" % (self.op.lexeme, self.lhs, self.rhs)
	def head(self): return self.op

class BinExp(Binary): pass
class Logical(Binary):
	""" The right-hand side may never get evaluated. """

class Variable(Expr):
	depth: Optional[int] = None  # Resolver fills this in; None means global.
	def __init__(self, name: Token): self.name = name
	def __str__(self): return self.name.lexeme
	def head(self): return self.name

class Assign(Expr):
	depth: Optional[int] = None  # Resolver fills this in; None means global.
	def __init__(self, name: Token, value: Expr):
		self.name, self.value = name, value
	def __str__(self): return "(= %s %s)" % (self.name.lexeme, self.value)
	def head(self): return self.name

class Call(Expr):
	def __init__(self, callee: Expr, paren: Token, args: Sequence[Expr]):
		self.callee, self.paren, self.args = callee, paren, args
	def __str__(self):
		return "%s(%s)" % (self.callee, ', '.join(map(str, self.args)))
	def head(self): return self.paren

class Get(Expr):
	def __init__(self, obj: Expr, name: Token):
		self.obj, self.name = obj, name
	def __str__(self): return "(%s.%s)" % (self.obj, self.name.lexeme)
	def head(self): return self.name

class Set(Expr):
	def __init__(self, obj: Expr, name: Token, value: Expr):
		self.obj, self.name, self.value = obj, name, value
	def __str__(self): return "(= %s.%s %s)" % (self.obj, self.name.lexeme, self.value)
	def head(self): return self.name

class This(Expr):
	depth: Optional[int] = None  # Resolver fills this in.
	def __init__(self, keyword: Token): self.keyword = keyword
	def __str__(self): return "this"
	def head(self): return self.keyword

###############################################################################
# Statements

class Expression(Stmt):
	def __init__(self, expr: Expr): self.expr = expr
	def head(self): return self.expr.head()

class Print(Stmt):
	def __init__(self, keyword: Token, expr: Expr):
		self._keyword, self.expr = keyword, expr
	def head(self): return self._keyword

class Var(Stmt):
	def __init__(self, name: Token, initializer: Optional[Expr]):
		self.name, self.initializer = name, initializer
	def __repr__(self): return "{var %s}" % self.name.lexeme
	def head(self): return self.name

class Block(Stmt):
	nesting = Nesting.BLOCK
	def __init__(self, brace: Token, statements: Sequence[Stmt]):
		self._brace, self.statements = brace, statements
	def head(self): return self._brace

class If(Stmt):
	def __init__(self, keyword: Token, condition: Expr, then_branch: Stmt, else_branch: Optional[Stmt]):
		self._keyword = keyword
		self.condition, self.then_branch, self.else_branch = condition, then_branch, else_branch
	def head(self): return self._keyword

class While(Stmt):
	def __init__(self, keyword: Token, condition: Expr, body: Stmt):
		self._keyword, self.condition, self.body = keyword, condition, body
	def head(self): return self._keyword

class Function(Stmt):
	"""
	Parameters and body statements share the one scope
	that each call creates. The body is not a separate Block.
	"""
	nesting = Nesting.CALL
	def __init__(self, name: Token, params: Sequence[Token], body: Sequence[Stmt]):
		self.name, self.params, self.body = name, params, body
	def __repr__(self):
		return "{fun %s(%s)}" % (self.name.lexeme, ", ".join(p.lexeme for p in self.params))
	def head(self): return self.name

class Return(Stmt):
	def __init__(self, keyword: Token, value: Optional[Expr]):
		self.keyword, self.value = keyword, value
	def head(self): return self.keyword

class Class(Stmt):
	nesting = Nesting.RECEIVER
	method_space: dict[str, Function]
	def __init__(self, name: Token, methods: Sequence[Function]):
		self.name = name
		self.methods = methods
		self.method_space = {}
		for m in methods:
			self.method_space[m.name.lexeme] = m
	def __repr__(self): return "{class %s}" % self.name.lexeme
	def head(self): return self.name
