"""
This module defines the specialized value-types that the tree-walker operates in terms of.
Basic primitive values play themselves, but special things like closures need more help.
"""
from abc import abstractmethod
from typing import Callable
from .. import syntax
from ..ontology import Token, Nesting, THIS, INITIALIZER, LoxRuntimeError
from .types import ARGS, VALUE, ENV, LoxValue, Return
from .evaluator import execute_block

###############################################################################

class Function(LoxValue):
	""" A run-time object that can be applied with arguments. """
	@abstractmethod
	def arity(self) -> int: pass

	@abstractmethod
	def call(self, args: ARGS) -> VALUE: pass

class Closure(Function):
	""" The run-time manifestation of a function: a callable value tied to its natal environment. """

	def __init__(self, dfn: syntax.Function, static_link: ENV, is_initializer: bool = False):
		self._dfn = dfn
		self._static_link = static_link  # Shared, never copied.
		self._is_initializer = is_initializer

	def __str__(self):
		return "<fn %s>" % self._name()

	def _name(self): return self._dfn.name.lexeme

	def arity(self) -> int:
		return len(self._dfn.params)

	def bind(self, instance: "Instance") -> "Closure":
		receiver = self._static_link.child(Nesting.RECEIVER)
		receiver.declare(THIS, instance)
		return Closure(self._dfn, receiver, self._is_initializer)

	def call(self, args: ARGS) -> VALUE:
		frame = self._static_link.child(self._dfn.nesting)
		for param, arg in zip(self._dfn.params, args):
			frame.declare(param.lexeme, arg)
		try:
			execute_block(self._dfn.body, frame)
		except Return as signal:
			result = signal.value
		else:
			result = None
		if self._is_initializer:
			# Whatever got returned, an initializer yields its receiver.
			return self._static_link.fetch(THIS)
		return result

class NativeFunction(Function):
	""" Python functions posing as Lox functions. All arguments arrive evaluated. """
	def __init__(self, name: str, fn: Callable, arity: int):
		self.name = name
		self._fn = fn
		self._arity = arity

	def __str__(self): return "<native fn>"

	def arity(self) -> int: return self._arity

	def call(self, args: ARGS) -> VALUE:
		return self._fn(*args)

class LoxClass(Function):
	""" Calling a class constructs an instance. There is no inheritance. """
	def __init__(self, name: str, methods: dict[str, Closure]):
		self.name = name
		self._methods = methods

	def __str__(self): return self.name

	def find_method(self, name: str):
		return self._methods.get(name)

	def arity(self) -> int:
		init = self.find_method(INITIALIZER)
		return 0 if init is None else init.arity()

	def call(self, args: ARGS) -> "Instance":
		instance = Instance(self)
		init = self.find_method(INITIALIZER)
		if init is not None:
			init.bind(instance).call(args)
		return instance

class Instance(LoxValue):
	""" A flat record of fields, with methods found on the class. """
	fields: dict[str, VALUE]

	def __init__(self, klass: LoxClass):
		self.klass = klass
		self.fields = {}

	def __str__(self): return "%s instance" % self.klass.name

	def get(self, name: Token) -> VALUE:
		key = name.lexeme
		if key in self.fields:
			return self.fields[key]
		method = self.klass.find_method(key)
		if method is not None:
			return method.bind(self)
		raise LoxRuntimeError(name, "Undefined property '%s'." % key)

	def set(self, name: Token, value: VALUE):
		self.fields[name.lexeme] = value
