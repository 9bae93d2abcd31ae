"""
I decided to factor out the run-time from the executive.
This is the overall control for the run-time: one persistent global
environment, against which any number of resolved programs may run.
"""
from typing import Callable, Sequence
from ..ontology import Stmt, LoxRuntimeError
from ..environment import Environment
from ..diagnostics import Report
from ..primitive import install_primitives
from .evaluator import execute_block
from .runtime import reset_runtime
from .types import StackOverflow

class Interpreter:
	globals: Environment

	def __init__(self, emit:Callable[[str], None]=print):
		self.emit = emit
		self.globals = Environment()
		install_primitives(self.globals)

	def interpret(self, statements:Sequence[Stmt], report:Report) -> bool:
		"""
		Run the statements at top level. A run-time error stops the whole run,
		but whatever the run already did to the globals stays done.
		Returns whether the run finished cleanly.
		"""
		reset_runtime(self.emit)
		try:
			execute_block(statements, self.globals)
		except LoxRuntimeError as ex:
			report.runtime_error(ex.token, ex.message)
			return False
		except StackOverflow as ex:
			report.stack_overflow(ex.args[0])
			return False
		except RecursionError:
			report.stack_overflow(None)
			return False
		return True
