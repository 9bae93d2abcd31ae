"""
This module aims to express an interface agreement
between the evaluator and various kinds of data.

Basic primitive values play themselves:
nil is None, booleans are bool, numbers are float, strings are str.
Everything else is some kind of LoxValue.
"""

from abc import ABC
from typing import Sequence, Union
from ..environment import Environment


NATIVE_DATA = Union[None, bool, float, str]

class LoxValue(ABC):
	""" Root for classes that implement specialized run-time data structures """

VALUE = Union[NATIVE_DATA, LoxValue]
ARGS = Sequence[VALUE]
ENV = Environment

class Return(Exception):
	"""
	The control signal for a `return` statement. It unwinds to the nearest
	call frame and no further. Deliberately unrelated to LoxRuntimeError.
	"""
	def __init__(self, value:VALUE):
		super().__init__()
		self.value = value

class StackOverflow(Exception):
	"""
	Lox recursion ran out of host stack. The argument is the call-site token.
	This is fatal to the run, and reported apart from ordinary run-time errors.
	"""
