"""
All the static variable-resolution stuff goes here.
By the time this pass is finished, every variable reference knows
how many scopes out from its use-site the run-time must walk to find it,
or else that it refers to a global.

The resolver opens a static layer in exactly the places where the
run-time will open a child environment, as listed in ontology.Nesting.
If those two ever disagree, distances come out wrong, so keep them in step.
"""
from typing import Optional, Iterable
from boozetools.support.foundation import Visitor
from . import syntax
from .diagnostics import Report, Phase, BEFORE_RUNNING
from .ontology import Token, Stmt, Nesting, THIS
from .space import Chain, AlreadyExists

class Yuck(Exception):
	"""
	The first argument will be the name of the pass fraught with error.
	The end-user might not care about this, but it's handy for testing.
	"""
	pass

class TopDown(Visitor):
	"""
	Convenience base-class to handle the dreary bits of a
	perfectly ordinary top-down walk through a syntax tree.
	"""
	def tour(self, items:Iterable):
		for i in items:
			self.visit(i)

	def visit_Literal(self, expr:syntax.Literal): pass

	def visit_Grouping(self, expr:syntax.Grouping):
		self.visit(expr.inner)

	def visit_Unary(self, expr:syntax.Unary):
		self.visit(expr.arg)

	def visit_BinExp(self, expr:syntax.BinExp):
		self.visit(expr.lhs)
		self.visit(expr.rhs)

	def visit_Logical(self, expr:syntax.Logical):
		self.visit(expr.lhs)
		self.visit(expr.rhs)

	def visit_Call(self, expr:syntax.Call):
		self.visit(expr.callee)
		self.tour(expr.args)

	def visit_Get(self, expr:syntax.Get):
		# Property names are looked up dynamically, so there is nothing to resolve.
		self.visit(expr.obj)

	def visit_Set(self, expr:syntax.Set):
		self.visit(expr.value)
		self.visit(expr.obj)

	def visit_Expression(self, stmt:syntax.Expression):
		self.visit(stmt.expr)

	def visit_Print(self, stmt:syntax.Print):
		self.visit(stmt.expr)

	def visit_If(self, stmt:syntax.If):
		self.visit(stmt.condition)
		self.visit(stmt.then_branch)
		if stmt.else_branch is not None:
			self.visit(stmt.else_branch)

	def visit_While(self, stmt:syntax.While):
		self.visit(stmt.condition)
		self.visit(stmt.body)

class Resolver(TopDown):
	"""
	This single top-down tree-walk does a few things:

	* Annotate each Variable, Assign, and This node with its static distance.
	* Complain about reading a variable within its own initializer.
	* Complain about declaring the same name twice in one local scope.
	* Complain about `return` outside any function, and `this` outside any class.

	The global scope is not on the chain. Names not found on the chain
	are left for the run-time to find among the globals.
	"""
	_chain: Chain
	_in_function: bool
	_in_class: bool
	_pending_global: Optional[str]

	def __init__(self, report:Report, known_globals:Optional[set[str]]=None):
		self.report = report
		# Persist this set between runs of a REPL so that `var a = a;`
		# can tell whether some earlier `a` exists.
		self.known_globals = set() if known_globals is None else known_globals
		self._start_over()

	def _start_over(self):
		self._chain = Chain()
		self._in_function = False
		self._in_class = False
		self._pending_global = None

	def resolve(self, statements:Iterable[Stmt]):
		for stmt in statements:
			try: self.visit(stmt)
			except RecursionError:
				self.report.too_deeply_nested(Phase.STATIC, stmt.head())
				self._start_over()

	###########################################################################
	# Bookkeeping

	def _open(self, nesting:Nesting):
		return self._chain.push(nesting)

	def _close(self):
		self._chain.pop()

	def _declare(self, name:Token):
		if self._chain:
			layer = self._chain.top
			try: layer.declare(name)
			except AlreadyExists:
				self.report.redefined(name, layer.locate(name.lexeme))

	def _define(self, name:Token):
		if self._chain:
			self._chain.top.define(name)
		else:
			self.known_globals.add(name.lexeme)

	def _resolve_local(self, expr, name:Token):
		expr.depth = self._chain.distance(name.lexeme)

	def _resolve_function(self, fn:syntax.Function):
		enclosing = self._in_function
		self._in_function = True
		self._open(fn.nesting)
		for param in fn.params:
			self._declare(param)
			self._define(param)
		self.tour(fn.body)
		self._close()
		self._in_function = enclosing

	###########################################################################
	# Expressions

	def visit_Variable(self, expr:syntax.Variable):
		key = expr.name.lexeme
		if self._chain:
			if self._chain.top.is_ready(key) is False:
				self.report.own_initializer(expr.name)
		elif key == self._pending_global:
			self.report.own_initializer(expr.name)
		self._resolve_local(expr, expr.name)

	def visit_Assign(self, expr:syntax.Assign):
		self.visit(expr.value)
		self._resolve_local(expr, expr.name)

	def visit_This(self, expr:syntax.This):
		if not self._in_class:
			self.report.this_outside_class(expr.keyword)
			return
		self._resolve_local(expr, expr.keyword)

	###########################################################################
	# Statements

	def visit_Block(self, stmt:syntax.Block):
		self._open(stmt.nesting)
		self.tour(stmt.statements)
		self._close()

	def visit_Var(self, stmt:syntax.Var):
		self._declare(stmt.name)
		if stmt.initializer is not None:
			at_top = not self._chain
			if at_top and stmt.name.lexeme not in self.known_globals:
				self._pending_global = stmt.name.lexeme
			try: self.visit(stmt.initializer)
			finally: self._pending_global = None
		self._define(stmt.name)

	def visit_Function(self, stmt:syntax.Function):
		# Define eagerly, so the function may refer to itself recursively.
		self._declare(stmt.name)
		self._define(stmt.name)
		self._resolve_function(stmt)

	def visit_Return(self, stmt:syntax.Return):
		if not self._in_function:
			self.report.return_at_top_level(stmt.keyword)
		# An initializer may say `return value;` but the instance is what comes back.
		if stmt.value is not None:
			self.visit(stmt.value)

	def visit_Class(self, stmt:syntax.Class):
		self._declare(stmt.name)
		self._define(stmt.name)
		enclosing = self._in_class
		self._in_class = True
		receiver = self._open(stmt.nesting)
		receiver.mount(THIS, None, True)
		for method in stmt.methods:
			self._resolve_function(method)
		self._close()
		self._in_class = enclosing

def resolve_statements(statements:Iterable[Stmt], report:Report, known_globals:Optional[set[str]]=None):
	""" Annotate the tree in place; raise Yuck if anything turned up. """
	Resolver(report, known_globals).resolve(statements)
	if report.sick_in(*BEFORE_RUNNING): raise Yuck("resolve")
