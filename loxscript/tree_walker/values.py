"""
This module defines the specialized value-types that the tree-walker operates in terms of.
Basic primitive values play themselves (nil is None, numbers are float),
but special things like closures, classes, and instances need more help.
"""
import math
from typing import Callable, Optional, Sequence, TYPE_CHECKING
from .. import syntax
from ..ontology import Token, CONSTRUCTOR_NAME, THIS
from ..environment import Environment
from .types import LoxCallable, VALUE, Return, UndefinedProperty

if TYPE_CHECKING:
	from .evaluator import Interpreter

###############################################################################

def _as_lox(value):
	""" Lox numbers are all floats, but host code is apt to hand back an int. """
	if isinstance(value, int) and not isinstance(value, bool): return float(value)
	return value

class NativeFunction(LoxCallable):
	""" A host-language function exposed to scripts. All it knows is how many arguments it wants. """
	def __init__(self, name:str, arity:int, fn:Callable[..., VALUE]):
		self.name = name
		self._arity = arity
		self._fn = fn

	def arity(self): return self._arity

	def call(self, interpreter, args):
		return _as_lox(self._fn(*args))

	def __str__(self): return "<native fn %s>" % self.name

class EngineFunction(LoxCallable):
	""" The run-time manifestation of a function declaration: a callable value tied to its natal environment. """
	def __init__(self, declaration:syntax.Function, closure:Environment, is_constructor:bool):
		self._declaration = declaration
		self._closure = closure
		self._is_constructor = is_constructor

	@property
	def name(self): return self._declaration.name.lexeme

	def arity(self): return len(self._declaration.params)

	def bind(self, instance:"ClassInstance") -> "EngineFunction":
		env = Environment(self._closure)
		env.define(THIS, instance)
		return EngineFunction(self._declaration, env, self._is_constructor)

	def call(self, interpreter:"Interpreter", args:Sequence[VALUE]) -> VALUE:
		env = Environment(self._closure)
		for param, arg in zip(self._declaration.params, args):
			env.define(param.lexeme, arg)
		completion = interpreter.execute_block(self._declaration.body, env)
		if self._is_constructor:
			return self._closure.get_at(0, THIS)
		if isinstance(completion, Return):
			return completion.value

	def __str__(self): return "<fn %s>" % self.name

###############################################################################

class ClassDeclaration(LoxCallable):
	""" Behavior lives here. """
	def __init__(self, name:str, superclass:Optional["ClassDeclaration"], methods:dict[str, EngineFunction]):
		self.name = name
		self.superclass = superclass
		self._methods = methods

	def find_method(self, name:str) -> Optional[EngineFunction]:
		cls = self
		while cls is not None:
			if name in cls._methods:
				return cls._methods[name]
			cls = cls.superclass

	def arity(self):
		ctor = self.find_method(CONSTRUCTOR_NAME)
		return 0 if ctor is None else ctor.arity()

	def call(self, interpreter, args):
		instance = ClassInstance(self)
		ctor = self.find_method(CONSTRUCTOR_NAME)
		if ctor is not None:
			ctor.bind(instance).call(interpreter, args)
		return instance

	def __str__(self): return self.name

class ClassInstance:
	""" Data live here. """
	def __init__(self, cls:ClassDeclaration):
		self.cls = cls
		self.fields = {}

	def get(self, name:Token) -> VALUE:
		# Fields shadow methods.
		if name.lexeme in self.fields:
			return self.fields[name.lexeme]
		method = self.cls.find_method(name.lexeme)
		if method is not None:
			return method.bind(self)
		raise UndefinedProperty(name, "Undefined property '%s'." % name.lexeme)

	def set(self, name:Token, value:VALUE):
		self.fields[name.lexeme] = value

	def __str__(self): return "instance of %s" % self.cls.name

###############################################################################

def is_truthy(value:VALUE) -> bool:
	""" False and nil are falsey and everything else is truthy. """
	if value is None: return False
	if isinstance(value, bool): return value
	return True

def is_equal(a:VALUE, b:VALUE) -> bool:
	# Python thinks True == 1.0, but Lox does not.
	if a is None or b is None: return a is b
	if isinstance(a, bool) or isinstance(b, bool):
		return type(a) is type(b) and a == b
	if isinstance(a, (float, str)) and isinstance(b, (float, str)):
		return type(a) is type(b) and a == b
	return a is b

def stringify(value:VALUE) -> str:
	if value is None: return "nil"
	if isinstance(value, bool): return "true" if value else "false"
	if isinstance(value, float):
		if math.isnan(value): return "NaN"
		if math.isinf(value): return "Infinity" if value > 0 else "-Infinity"
		# Whole numbers below 1e21 print with neither a fraction nor an exponent.
		if value.is_integer() and abs(value) < 1e21: return "%.0f" % value
		return repr(value)
	return str(value)
