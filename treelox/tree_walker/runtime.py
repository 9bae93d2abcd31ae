"""
The evaluation and execution methods, one per kind of syntax.
Also the fixed rules for truth, equality, arithmetic, and display.
"""
import math
import operator
from typing import Callable
from .. import syntax
from ..ontology import Token, TokenKind, INITIALIZER, LoxRuntimeError
from .types import VALUE, ENV, Return, StackOverflow
from .evaluator import evaluate, execute, execute_block, attach_evaluation_methods
from .values import Function, Closure, LoxClass, Instance

# Where `print` statements send their text. The executive sets this.
_sink: Callable[[str], None] = print

def reset_runtime(sink:Callable[[str], None]):
	global _sink
	_sink = sink

###############################################################################

def is_truthy(value:VALUE) -> bool:
	""" Only nil and false are false. Zero and the empty string are true. """
	if value is None: return False
	if isinstance(value, bool): return value
	return True

def is_equal(a:VALUE, b:VALUE) -> bool:
	""" No coercion: different types are never equal. """
	if a is None or b is None: return a is b
	if type(a) is not type(b): return False
	if isinstance(a, (bool, float, str)): return a == b
	return a is b

def stringify(value:VALUE) -> str:
	if value is None: return "nil"
	if value is True: return "true"
	if value is False: return "false"
	if isinstance(value, float):
		if value.is_integer():
			if value == 0 and math.copysign(1.0, value) < 0: return "-0"
			return "%d" % value
		return repr(value)
	return str(value)

def _is_number(x): return isinstance(x, float)

def _check_number(op:Token, x):
	if not _is_number(x):
		raise LoxRuntimeError(op, "Operand must be a number.")

def _check_numbers(op:Token, a, b):
	if not (_is_number(a) and _is_number(b)):
		raise LoxRuntimeError(op, "Operands must be numbers.")

def _numeric(fn):
	def binary(op:Token, a, b):
		_check_numbers(op, a, b)
		return fn(a, b)
	return binary

def _plus(op:Token, a, b):
	if _is_number(a) and _is_number(b): return a + b
	if isinstance(a, str) and isinstance(b, str): return a + b
	raise LoxRuntimeError(op, "Operands must be two numbers or two strings.")

def _divide(op:Token, a, b):
	_check_numbers(op, a, b)
	if b == 0:
		raise LoxRuntimeError(op, "Division by zero.")
	return a / b

PRIMITIVE_BINARY = {
	TokenKind.PLUS: _plus,
	TokenKind.MINUS: _numeric(operator.sub),
	TokenKind.STAR: _numeric(operator.mul),
	TokenKind.SLASH: _divide,
	TokenKind.GREATER: _numeric(operator.gt),
	TokenKind.GREATER_EQUAL: _numeric(operator.ge),
	TokenKind.LESS: _numeric(operator.lt),
	TokenKind.LESS_EQUAL: _numeric(operator.le),
	TokenKind.EQUAL_EQUAL: lambda op, a, b: is_equal(a, b),
	TokenKind.BANG_EQUAL: lambda op, a, b: not is_equal(a, b),
}

# For each short-cut operator, the truth-value of the left side that settles the matter.
SHORTCUT = {
	TokenKind.AND: False,
	TokenKind.OR: True,
}

###############################################################################

def _eval_literal(expr:syntax.Literal, env:ENV):
	return expr.value

def _eval_grouping(expr:syntax.Grouping, env:ENV):
	return evaluate(expr.inner, env)

def _eval_unary(expr:syntax.Unary, env:ENV):
	arg = evaluate(expr.arg, env)
	if expr.op.kind is TokenKind.MINUS:
		_check_number(expr.op, arg)
		return -arg
	assert expr.op.kind is TokenKind.BANG, expr.op
	return not is_truthy(arg)

def _eval_bin_exp(expr:syntax.BinExp, env:ENV):
	a = evaluate(expr.lhs, env)
	b = evaluate(expr.rhs, env)
	return PRIMITIVE_BINARY[expr.op.kind](expr.op, a, b)

def _eval_logical(expr:syntax.Logical, env:ENV):
	lhs = evaluate(expr.lhs, env)
	return lhs if is_truthy(lhs) == SHORTCUT[expr.op.kind] else evaluate(expr.rhs, env)

def _eval_variable(expr:syntax.Variable, env:ENV):
	return env.get(expr.name, expr.depth)

def _eval_assign(expr:syntax.Assign, env:ENV):
	value = evaluate(expr.value, env)
	env.assign(expr.name, value, expr.depth)
	return value

def _eval_this(expr:syntax.This, env:ENV):
	return env.get(expr.keyword, expr.depth)

def _eval_call(expr:syntax.Call, env:ENV):
	callee = evaluate(expr.callee, env)
	args = [evaluate(a, env) for a in expr.args]
	if not isinstance(callee, Function):
		raise LoxRuntimeError(expr.paren, "Can only call functions and classes.")
	if len(args) != callee.arity():
		raise LoxRuntimeError(expr.paren, "Expected %d arguments but got %d." % (callee.arity(), len(args)))
	try: return callee.call(args)
	except RecursionError:
		raise StackOverflow(expr.paren) from None

def _eval_get(expr:syntax.Get, env:ENV):
	obj = evaluate(expr.obj, env)
	if isinstance(obj, Instance):
		return obj.get(expr.name)
	raise LoxRuntimeError(expr.name, "Only instances have properties.")

def _eval_set(expr:syntax.Set, env:ENV):
	obj = evaluate(expr.obj, env)
	if not isinstance(obj, Instance):
		raise LoxRuntimeError(expr.name, "Only instances have fields.")
	value = evaluate(expr.value, env)
	obj.set(expr.name, value)
	return value

###############################################################################

def _exec_expression(stmt:syntax.Expression, env:ENV):
	evaluate(stmt.expr, env)

def _exec_print(stmt:syntax.Print, env:ENV):
	_sink(stringify(evaluate(stmt.expr, env)))

def _exec_var(stmt:syntax.Var, env:ENV):
	value = None if stmt.initializer is None else evaluate(stmt.initializer, env)
	env.declare(stmt.name.lexeme, value)

def _exec_block(stmt:syntax.Block, env:ENV):
	execute_block(stmt.statements, env.child(stmt.nesting))

def _exec_if(stmt:syntax.If, env:ENV):
	if is_truthy(evaluate(stmt.condition, env)):
		execute(stmt.then_branch, env)
	elif stmt.else_branch is not None:
		execute(stmt.else_branch, env)

def _exec_while(stmt:syntax.While, env:ENV):
	while is_truthy(evaluate(stmt.condition, env)):
		execute(stmt.body, env)

def _exec_function(stmt:syntax.Function, env:ENV):
	env.declare(stmt.name.lexeme, Closure(stmt, env))

def _exec_return(stmt:syntax.Return, env:ENV):
	value = None if stmt.value is None else evaluate(stmt.value, env)
	raise Return(value)

def _exec_class(stmt:syntax.Class, env:ENV):
	methods = {
		name: Closure(dfn, env, is_initializer=(name == INITIALIZER))
		for name, dfn in stmt.method_space.items()
	}
	env.declare(stmt.name.lexeme, LoxClass(stmt.name.lexeme, methods))

attach_evaluation_methods(globals())
