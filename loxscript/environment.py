"""
Simplest possible environment concept.

This is the canonical list-structured search: one Environment per lexical scope,
each with a static link to the scope that encloses it. Closures keep their natal
environment alive simply by holding a reference to it.
"""
from typing import Any, Optional
from .ontology import Token
from .tree_walker.types import UndefinedVariable

class Environment:
	_bindings: dict[str, Any]
	enclosing: Optional["Environment"]

	def __init__(self, enclosing:Optional["Environment"]=None):
		self._bindings = {}
		self.enclosing = enclosing

	def __contains__(self, name:str) -> bool: return name in self._bindings

	def define(self, name:str, value:Any):
		self._bindings[name] = value

	def get(self, name:Token) -> Any:
		env = self
		while env is not None:
			if name.lexeme in env._bindings:
				return env._bindings[name.lexeme]
			env = env.enclosing
		raise UndefinedVariable(name, "Undefined variable '%s'." % name.lexeme)

	def assign(self, name:Token, value:Any):
		env = self
		while env is not None:
			if name.lexeme in env._bindings:
				env._bindings[name.lexeme] = value
				return
			env = env.enclosing
		raise UndefinedVariable(name, "Undefined variable '%s'." % name.lexeme)

	def ancestor(self, distance:int) -> "Environment":
		env = self
		for _ in range(distance):
			env = env.enclosing
		return env

	def get_at(self, distance:int, name:str) -> Any:
		# The resolver has already proven the name lives exactly there.
		return self.ancestor(distance)._bindings[name]

	def assign_at(self, distance:int, name:Token, value:Any):
		self.ancestor(distance)._bindings[name.lexeme] = value
