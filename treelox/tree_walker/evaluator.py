"""
The generic machinery that everything needs,
without the specific methods corresponding to particular syntax.
"""

from typing import Iterable
from ..ontology import Expr, Stmt
from .types import VALUE, ENV


def evaluate(expr:Expr, env:ENV) -> VALUE:
	try: fn = EVALUATE[type(expr)]
	except KeyError: raise NotImplementedError(type(expr), expr)
	return fn(expr, env)

def execute(stmt:Stmt, env:ENV) -> None:
	try: fn = EXECUTE[type(stmt)]
	except KeyError: raise NotImplementedError(type(stmt), stmt)
	fn(stmt, env)

def execute_block(statements:Iterable[Stmt], env:ENV) -> None:
	"""
	Run statements in the given environment, which the caller has
	already made fresh if that is called for. A Return signal or a
	run-time error passes straight through.
	"""
	for stmt in statements:
		execute(stmt, env)

EVALUATE = {}
EXECUTE = {}

def attach_evaluation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_eval_"):
			_t = _v.__annotations__["expr"]
			assert isinstance(_t, type), (_k, _t)
			EVALUATE[_t] = _v
		elif _k.startswith("_exec_"):
			_t = _v.__annotations__["stmt"]
			assert isinstance(_t, type), (_k, _t)
			EXECUTE[_t] = _v
