"""
Build the primitive namespace: the few native functions
that exist in the global scope before any program runs.
"""
import time
from .environment import Environment
from .tree_walker.values import NativeFunction

def _clock():
	""" Seconds since the UNIX epoch, with fractional part. """
	return time.time()

NATIVES = [
	NativeFunction("clock", _clock, 0),
]

def root_names() -> set[str]:
	return {native.name for native in NATIVES}

def install_primitives(env:Environment):
	for native in NATIVES:
		env.declare(native.name, native)
