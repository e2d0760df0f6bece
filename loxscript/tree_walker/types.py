"""
This module aims to express an interface agreement
between the evaluator and various kinds of data,
and to name the ways evaluation can go wrong.
"""

from abc import ABC, abstractmethod
from typing import NamedTuple, Optional, Sequence, Union, TYPE_CHECKING
from ..ontology import Token

if TYPE_CHECKING:
	from .evaluator import Interpreter


class LoxCallable(ABC):
	"""
	The capability to be called. Native functions, user-defined functions,
	and classes all have it, but otherwise they have nothing in common.
	"""
	@abstractmethod
	def arity(self) -> int: pass

	@abstractmethod
	def call(self, interpreter:"Interpreter", args:Sequence["VALUE"]) -> "VALUE": pass


# Nil is None, and numbers are always float. Runtime classes live in .values
VALUE = Union[None, bool, float, str, LoxCallable, "ClassInstance"]


class Return(NamedTuple):
	""" Completion signal: a statement asked to leave the nearest enclosing function. """
	value: VALUE

COMPLETION = Optional[Return]  # None means normal completion.


class LoxRuntimeError(Exception):
	""" Aborts the run in progress. Carries the token that locates the trouble. """
	def __init__(self, token:Token, message:str):
		super().__init__(message)
		self.token = token
		self.message = message

class UndefinedVariable(LoxRuntimeError): pass
class UndefinedProperty(LoxRuntimeError): pass
class TypeMismatch(LoxRuntimeError): pass
class NotCallable(LoxRuntimeError): pass
class ArityMismatch(LoxRuntimeError): pass
class DivisionByZero(LoxRuntimeError): pass
