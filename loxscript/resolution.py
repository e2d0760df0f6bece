"""
All the variable resolution stuff goes here.
By the time this pass is finished, every local variable reference
knows how many scopes outward the evaluator must walk to find it.
References that match no scope are assumed global and checked at run-time.
"""
from enum import Enum
from typing import Iterable, Optional
from boozetools.support.foundation import Visitor
from . import syntax
from .diagnostics import Report
from .ontology import Token, Expr, Stmt, CONSTRUCTOR_NAME, THIS, SUPER

class FunctionKind(Enum):
	NONE = 0
	FUNCTION = 1
	CONSTRUCTOR = 2
	METHOD = 3

class ClassKind(Enum):
	NONE = 0
	CLASS = 1
	SUBCLASS = 2

class TopDown(Visitor):
	"""
	Convenience base-class to handle the dreary bits of a
	perfectly ordinary top-down walk through a syntax tree.
	"""
	def tour(self, items:Iterable):
		for i in items:
			self.visit(i)

	def visit_Literal(self, expr:syntax.Literal): pass

	def visit_Binary(self, expr:syntax.Binary):
		self.visit(expr.left)
		self.visit(expr.right)

	def visit_Logical(self, expr:syntax.Logical):
		self.visit(expr.left)
		self.visit(expr.right)

	def visit_Unary(self, expr:syntax.Unary):
		self.visit(expr.right)

	def visit_Grouping(self, expr:syntax.Grouping):
		self.visit(expr.expr)

	def visit_Call(self, expr:syntax.Call):
		self.visit(expr.callee)
		self.tour(expr.args)

	def visit_Get(self, expr:syntax.Get):
		# Properties are looked up dynamically, so only the object gets resolved.
		self.visit(expr.obj)

	def visit_Set(self, expr:syntax.Set):
		self.visit(expr.value)
		self.visit(expr.obj)

	def visit_ExpressionStmt(self, stmt:syntax.ExpressionStmt):
		self.visit(stmt.expr)

	def visit_Print(self, stmt:syntax.Print):
		self.visit(stmt.expr)

	def visit_If(self, stmt:syntax.If):
		self.visit(stmt.cond)
		self.visit(stmt.then)
		if stmt.otherwise is not None: self.visit(stmt.otherwise)

	def visit_While(self, stmt:syntax.While):
		self.visit(stmt.cond)
		self.visit(stmt.body)

class Resolver(TopDown):
	"""
	This single top-down tree-walk does two things:

	* Connect each local variable, `this`, and `super` reference to the
	  number of scopes between it and its declaration.
	* Complain about things which are structurally wrong but which the
	  parser cannot see, such as `return` at top level.

	Problems go to the report; the walk carries on regardless.
	"""
	distances: dict[Expr, int]
	report: Report

	_scopes: list[dict[str, bool]]
	_function_kind: FunctionKind
	_class_kind: ClassKind

	def __init__(self, report:Report, distances:Optional[dict[Expr, int]]=None):
		self.report = report
		self.distances = {} if distances is None else distances
		self._scopes = []
		self._function_kind = FunctionKind.NONE
		self._class_kind = ClassKind.NONE

	def resolve(self, statements:Iterable[Stmt]) -> dict[Expr, int]:
		self.tour(statements)
		return self.distances

	# Scope bookkeeping:

	def _begin_scope(self): self._scopes.append({})
	def _end_scope(self): self._scopes.pop()

	def _declare(self, name:Token):
		if not self._scopes: return
		scope = self._scopes[-1]
		if name.lexeme in scope:
			self.report.error(name, "Already a variable with this name in this scope.")
		scope[name.lexeme] = False

	def _define(self, name:Token):
		if not self._scopes: return
		self._scopes[-1][name.lexeme] = True

	def _resolve_local(self, expr:Expr, name:Token):
		for depth, scope in enumerate(reversed(self._scopes)):
			if name.lexeme in scope:
				self.distances[expr] = depth
				return
		# Not found. Assume it is global.

	def _resolve_function(self, function:syntax.Function, kind:FunctionKind):
		enclosing_kind = self._function_kind
		self._function_kind = kind
		self._begin_scope()
		for param in function.params:
			self._declare(param)
			self._define(param)
		self.tour(function.body)
		self._end_scope()
		self._function_kind = enclosing_kind

	# Statements:

	def visit_Block(self, stmt:syntax.Block):
		self._begin_scope()
		self.tour(stmt.statements)
		self._end_scope()

	def visit_Class(self, stmt:syntax.Class):
		enclosing_kind = self._class_kind
		self._class_kind = ClassKind.CLASS
		self._declare(stmt.name)
		self._define(stmt.name)

		if stmt.superclass is not None:
			self._class_kind = ClassKind.SUBCLASS
			if stmt.superclass.name.lexeme == stmt.name.lexeme:
				self.report.error(stmt.superclass.name, "A class can't inherit from itself.")
			self.visit(stmt.superclass)
			self._begin_scope()
			self._scopes[-1][SUPER] = True

		self._begin_scope()
		self._scopes[-1][THIS] = True
		for method in stmt.methods:
			kind = FunctionKind.CONSTRUCTOR if method.name.lexeme == CONSTRUCTOR_NAME else FunctionKind.METHOD
			self._resolve_function(method, kind)
		self._end_scope()

		if stmt.superclass is not None: self._end_scope()
		self._class_kind = enclosing_kind

	def visit_Function(self, stmt:syntax.Function):
		# Define the name eagerly, so the function can refer to itself recursively.
		self._declare(stmt.name)
		self._define(stmt.name)
		self._resolve_function(stmt, FunctionKind.FUNCTION)

	def visit_Return(self, stmt:syntax.Return):
		if self._function_kind is FunctionKind.NONE:
			self.report.error(stmt.keyword, "Can't return from top-level code.")
		if stmt.value is not None:
			if self._function_kind is FunctionKind.CONSTRUCTOR:
				self.report.error(stmt.keyword, "Can't return a value from an initializer.")
			self.visit(stmt.value)

	def visit_Var(self, stmt:syntax.Var):
		self._declare(stmt.name)
		if stmt.init is not None: self.visit(stmt.init)
		self._define(stmt.name)

	# Expressions:

	def visit_Assign(self, expr:syntax.Assign):
		self.visit(expr.value)
		self._resolve_local(expr, expr.name)

	def visit_Super(self, expr:syntax.Super):
		if self._class_kind is ClassKind.NONE:
			self.report.error(expr.keyword, "Can't use 'super' outside of a class.")
		elif self._class_kind is not ClassKind.SUBCLASS:
			self.report.error(expr.keyword, "Can't use 'super' in a class with no superclass.")
		self._resolve_local(expr, expr.keyword)

	def visit_This(self, expr:syntax.This):
		if self._class_kind is ClassKind.NONE:
			self.report.error(expr.keyword, "Can't use 'this' outside of a class.")
		self._resolve_local(expr, expr.keyword)

	def visit_Variable(self, expr:syntax.Variable):
		if self._scopes and self._scopes[-1].get(expr.name.lexeme) is False:
			self.report.error(expr.name, "Can't read local variable in its own initializer.")
		self._resolve_local(expr, expr.name)

def resolve(statements:Iterable[Stmt], report:Report, distances:Optional[dict[Expr, int]]=None) -> dict[Expr, int]:
	""" Run the resolver. The distance table is only trustworthy if the report stays healthy. """
	return Resolver(report, distances).resolve(statements)
