"""
The resolver's notion of nested name-spaces.
These mirror the lexical structure of the program, not any run-time scope,
and they vanish once resolution is done.
"""
from typing import Optional
from .ontology import Token, Nesting

class AlreadyExists(KeyError): pass

class Layer:
	"""
	Lightly enhanced dictionary: It does not like duplicate keys.
	Each name maps to whether its initializer has finished.
	"""
	_locate: dict[str, Optional[Token]]
	_ready: dict[str, bool]

	def __init__(self, nesting:Nesting):
		self.nesting = nesting
		self._locate, self._ready = {}, {}

	def __contains__(self, key:str) -> bool:
		return key in self._ready

	def is_ready(self, key:str) -> Optional[bool]:
		return self._ready.get(key)

	def locate(self, key:str) -> Optional[Token]:
		return self._locate[key]

	def mount(self, key:str, token:Optional[Token], ready:bool):
		if key in self._ready:
			raise AlreadyExists(key)
		self._locate[key] = token
		self._ready[key] = ready

	def declare(self, name:Token):
		self.mount(name.lexeme, name, False)

	def define(self, name:Token):
		self._ready[name.lexeme] = True

class Chain:
	""" The stack of layers from the innermost outward. Globals are not in here. """
	def __init__(self):
		self._layers:list[Layer] = []

	def __bool__(self): return bool(self._layers)
	def __len__(self): return len(self._layers)

	@property
	def top(self) -> Layer: return self._layers[-1]

	def push(self, nesting:Nesting) -> Layer:
		layer = Layer(nesting)
		self._layers.append(layer)
		return layer

	def pop(self) -> Layer:
		return self._layers.pop()

	def distance(self, key:str) -> Optional[int]:
		""" How many layers out from the innermost, or None for a global. """
		for depth, layer in enumerate(reversed(self._layers)):
			if key in layer:
				return depth
		return None
