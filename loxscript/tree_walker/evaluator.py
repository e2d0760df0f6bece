"""
The tree-walking evaluator.

Every statement and expression is evaluated against an environment which
is passed explicitly. Entering a block or a call makes a new environment
and hands it down; the caller never loses its own, so nothing needs to be
put back afterward, whether evaluation returns normally or blows up.

Statements produce a completion: `None` to carry on, or a `Return`
signal which travels outward through blocks and loops until the
nearest function call consumes it.
"""
from typing import Callable, Iterable, Sequence
from boozetools.support.foundation import Visitor
from .. import syntax
from ..ontology import Expr, Stmt, Token, THIS, SUPER, CONSTRUCTOR_NAME
from ..environment import Environment
from .types import (
	VALUE, COMPLETION, Return, LoxCallable,
	TypeMismatch, NotCallable, ArityMismatch, DivisionByZero, UndefinedProperty,
)
from .values import (
	NativeFunction, EngineFunction, ClassDeclaration, ClassInstance,
	is_truthy, is_equal, stringify,
)

def _number_operand(op:Token, value:VALUE) -> float:
	if isinstance(value, float): return value
	raise TypeMismatch(op, "Operand must be a number.")

def _number_operands(op:Token, left:VALUE, right:VALUE):
	if isinstance(left, float) and isinstance(right, float): return
	raise TypeMismatch(op, "Operands must be numbers.")

def _plus(op:Token, left:VALUE, right:VALUE) -> VALUE:
	if isinstance(left, float) and isinstance(right, float):
		return left + right
	if isinstance(left, (float, str)) and isinstance(right, (float, str)):
		return stringify(left) + stringify(right)
	raise TypeMismatch(op, "Operands must be two numbers or two strings.")

def _divide(op:Token, left:float, right:float) -> float:
	if right == 0: raise DivisionByZero(op, "Division by zero.")
	return left / right

ARITHMETIC = {
	"-": lambda op, a, b: a - b,
	"*": lambda op, a, b: a * b,
	"/": _divide,
	">": lambda op, a, b: a > b,
	">=": lambda op, a, b: a >= b,
	"<": lambda op, a, b: a < b,
	"<=": lambda op, a, b: a <= b,
}

class Interpreter(Visitor):
	"""
	Holds the global environment and the resolver's distance table.
	The same interpreter can run several programs in succession,
	as the REPL does, and globals persist between them.
	"""
	globals: Environment
	distances: dict[Expr, int]

	def __init__(self, out:Callable[[str], None]=print):
		self.globals = Environment()
		self.distances = {}
		self._out = out
		self._methods = {}

	def define_native(self, name:str, arity:int, fn:Callable[..., VALUE]):
		""" The one way to extend the language: put a host function in the global scope. """
		self.globals.define(name, NativeFunction(name, arity, fn))

	def interpret(self, statements:Iterable[Stmt]):
		""" Runs statements at top level. Runtime errors propagate to the caller. """
		for stmt in statements:
			self.execute(stmt, self.globals)

	def _method_for(self, node):
		""" The same visit_X method Visitor.visit would find, looked up once per node class. """
		method = self._methods[type(node)] = getattr(self, "visit_" + type(node).__name__)
		return method

	# These two bypass Visitor.visit: each level of nesting costs one Python frame, not two.
	def execute(self, stmt:Stmt, env:Environment) -> COMPLETION:
		try: method = self._methods[type(stmt)]
		except KeyError: method = self._method_for(stmt)
		return method(stmt, env)

	def execute_block(self, statements:Sequence[Stmt], env:Environment) -> COMPLETION:
		for stmt in statements:
			completion = self.execute(stmt, env)
			if completion is not None: return completion

	def evaluate(self, expr:Expr, env:Environment) -> VALUE:
		try: method = self._methods[type(expr)]
		except KeyError: method = self._method_for(expr)
		return method(expr, env)

	def _look_up(self, name:Token, expr:Expr, env:Environment) -> VALUE:
		try: distance = self.distances[expr]
		except KeyError: return self.globals.get(name)
		else: return env.get_at(distance, name.lexeme)

	###########################################################################
	# Statements

	def visit_Block(self, stmt:syntax.Block, env:Environment) -> COMPLETION:
		return self.execute_block(stmt.statements, Environment(env))

	def visit_Class(self, stmt:syntax.Class, env:Environment):
		superclass = None
		if stmt.superclass is not None:
			superclass = self.evaluate(stmt.superclass, env)
			if not isinstance(superclass, ClassDeclaration):
				raise TypeMismatch(stmt.superclass.name, "Superclass must be a class.")
		env.define(stmt.name.lexeme, None)

		method_env = env
		if superclass is not None:
			method_env = Environment(env)
			method_env.define(SUPER, superclass)
		methods = {
			method.name.lexeme: EngineFunction(method, method_env, method.name.lexeme == CONSTRUCTOR_NAME)
			for method in stmt.methods
		}
		env.assign(stmt.name, ClassDeclaration(stmt.name.lexeme, superclass, methods))

	def visit_ExpressionStmt(self, stmt:syntax.ExpressionStmt, env:Environment):
		self.evaluate(stmt.expr, env)

	def visit_Function(self, stmt:syntax.Function, env:Environment):
		env.define(stmt.name.lexeme, EngineFunction(stmt, env, False))

	def visit_If(self, stmt:syntax.If, env:Environment) -> COMPLETION:
		if is_truthy(self.evaluate(stmt.cond, env)):
			return self.execute(stmt.then, env)
		elif stmt.otherwise is not None:
			return self.execute(stmt.otherwise, env)

	def visit_Print(self, stmt:syntax.Print, env:Environment):
		self._out(stringify(self.evaluate(stmt.expr, env)))

	def visit_Return(self, stmt:syntax.Return, env:Environment) -> Return:
		value = None if stmt.value is None else self.evaluate(stmt.value, env)
		return Return(value)

	def visit_Var(self, stmt:syntax.Var, env:Environment):
		value = None if stmt.init is None else self.evaluate(stmt.init, env)
		env.define(stmt.name.lexeme, value)

	def visit_While(self, stmt:syntax.While, env:Environment) -> COMPLETION:
		while is_truthy(self.evaluate(stmt.cond, env)):
			completion = self.execute(stmt.body, env)
			if completion is not None: return completion

	###########################################################################
	# Expressions

	def visit_Assign(self, expr:syntax.Assign, env:Environment) -> VALUE:
		value = self.evaluate(expr.value, env)
		try: distance = self.distances[expr]
		except KeyError: self.globals.assign(expr.name, value)
		else: env.assign_at(distance, expr.name, value)
		return value

	def visit_Binary(self, expr:syntax.Binary, env:Environment) -> VALUE:
		left = self.evaluate(expr.left, env)
		right = self.evaluate(expr.right, env)
		op = expr.op
		if op.kind == "==": return is_equal(left, right)
		if op.kind == "!=": return not is_equal(left, right)
		if op.kind == "+": return _plus(op, left, right)
		_number_operands(op, left, right)
		return ARITHMETIC[op.kind](op, left, right)

	def visit_Call(self, expr:syntax.Call, env:Environment) -> VALUE:
		callee = self.evaluate(expr.callee, env)
		args = [self.evaluate(a, env) for a in expr.args]
		if not isinstance(callee, LoxCallable):
			raise NotCallable(expr.paren, "Can only call functions and classes.")
		if len(args) != callee.arity():
			raise ArityMismatch(expr.paren, "Expected %d arguments but got %d." % (callee.arity(), len(args)))
		return callee.call(self, args)

	def visit_Get(self, expr:syntax.Get, env:Environment) -> VALUE:
		obj = self.evaluate(expr.obj, env)
		if isinstance(obj, ClassInstance):
			return obj.get(expr.name)
		raise TypeMismatch(expr.name, "Only instances have properties.")

	def visit_Grouping(self, expr:syntax.Grouping, env:Environment) -> VALUE:
		return self.evaluate(expr.expr, env)

	def visit_Literal(self, expr:syntax.Literal, env:Environment) -> VALUE:
		return expr.value

	def visit_Logical(self, expr:syntax.Logical, env:Environment) -> VALUE:
		left = self.evaluate(expr.left, env)
		if expr.op.kind == "OR":
			if is_truthy(left): return left
		elif not is_truthy(left):
			return left
		return self.evaluate(expr.right, env)

	def visit_Set(self, expr:syntax.Set, env:Environment) -> VALUE:
		obj = self.evaluate(expr.obj, env)
		if not isinstance(obj, ClassInstance):
			raise TypeMismatch(expr.name, "Only instances have fields.")
		value = self.evaluate(expr.value, env)
		obj.set(expr.name, value)
		return value

	def visit_Super(self, expr:syntax.Super, env:Environment) -> VALUE:
		distance = self.distances[expr]
		superclass = env.get_at(distance, SUPER)
		# The `this` scope always sits directly inside the `super` scope.
		instance = env.get_at(distance - 1, THIS)
		method = superclass.find_method(expr.method.lexeme)
		if method is None:
			raise UndefinedProperty(expr.method, "Undefined property '%s'." % expr.method.lexeme)
		return method.bind(instance)

	def visit_This(self, expr:syntax.This, env:Environment) -> VALUE:
		return self._look_up(expr.keyword, expr, env)

	def visit_Unary(self, expr:syntax.Unary, env:Environment) -> VALUE:
		right = self.evaluate(expr.right, env)
		if expr.op.kind == "!": return not is_truthy(right)
		return -_number_operand(expr.op, right)

	def visit_Variable(self, expr:syntax.Variable, env:Environment) -> VALUE:
		return self._look_up(expr.name, expr, env)
