"""
Simplest possible environment concept.

This is the canonical list-structured search, except that the resolver
already worked out how far out to go, so the search is a straight walk.

Environments are shared, never copied. When a closure captures one,
every later change to it shows through to every holder, and it lives
for as long as any holder does.
"""
from typing import Any, Optional
from .ontology import Token, Nesting, LoxRuntimeError

class Environment:
	_bindings: dict[str, Any]

	def __init__(self, static_link:Optional["Environment"]=None, nesting:Optional[Nesting]=None):
		self._bindings = {}
		self._static_link = static_link
		self.nesting = nesting
		self._root = self if static_link is None else static_link._root

	def __repr__(self):
		kind = self.nesting.value if self.nesting else "global"
		return "<Environment %s %s>" % (kind, sorted(self._bindings))

	def __contains__(self, name:str) -> bool:
		return name in self._bindings

	def child(self, nesting:Nesting) -> "Environment":
		return Environment(self, nesting)

	def declare(self, name:str, value:Any):
		""" Re-declaring a name in the same scope just overwrites it. """
		self._bindings[name] = value

	def ancestor(self, distance:int) -> "Environment":
		env = self
		for _ in range(distance):
			env = env._static_link
		return env

	def _locate(self, name:Token, distance:Optional[int]) -> "Environment":
		env = self._root if distance is None else self.ancestor(distance)
		if name.lexeme not in env._bindings:
			raise LoxRuntimeError(name, "Undefined variable '%s'." % name.lexeme)
		return env

	def get(self, name:Token, distance:Optional[int]) -> Any:
		return self._locate(name, distance)._bindings[name.lexeme]

	def assign(self, name:Token, value:Any, distance:Optional[int]):
		self._locate(name, distance)._bindings[name.lexeme] = value

	def fetch(self, key:str) -> Any:
		""" Direct access by plain name in this one scope, for the run-time's own reserved names. """
		return self._bindings[key]
