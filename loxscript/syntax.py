"""
The set of parse-nodes in simple form.
The parser calls these constructors as it reduces each rule.
Class-level type annotations make peace with the IDE about field types.
"""
from typing import Any, Optional, Sequence
from .ontology import Token, Expr, Stmt

###############################################################################
# Expressions

class Assign(Expr):
	def __init__(self, name:Token, value:Expr):
		self.name, self.value = name, value
	def __str__(self): return "(%s = %s)" % (self.name.lexeme, self.value)

class Binary(Expr):
	def __init__(self, left:Expr, op:Token, right:Expr):
		self.left, self.op, self.right = left, op, right
	def __str__(self): return "(%s %s %s)" % (self.left, self.op.lexeme, self.right)

class Call(Expr):
	args: Sequence[Expr]
	def __init__(self, callee:Expr, paren:Token, args:Sequence[Expr]):
		self.callee, self.paren, self.args = callee, paren, args
	def __str__(self): return "%s(%s)" % (self.callee, ", ".join(map(str, self.args)))

class Get(Expr):
	def __init__(self, obj:Expr, name:Token):
		self.obj, self.name = obj, name
	def __str__(self): return "%s.%s" % (self.obj, self.name.lexeme)

class Grouping(Expr):
	def __init__(self, expr:Expr):
		self.expr = expr
	def __str__(self): return "(%s)" % self.expr

class Literal(Expr):
	def __init__(self, value:Any):
		self.value = value
	def __str__(self): return "<Literal %r>" % self.value

class Logical(Expr):
	def __init__(self, left:Expr, op:Token, right:Expr):
		self.left, self.op, self.right = left, op, right
	def __str__(self): return "(%s %s %s)" % (self.left, self.op.lexeme, self.right)

class Super(Expr):
	def __init__(self, keyword:Token, method:Token):
		self.keyword, self.method = keyword, method
	def __str__(self): return "super.%s" % self.method.lexeme

class Set(Expr):
	def __init__(self, obj:Expr, name:Token, value:Expr):
		self.obj, self.name, self.value = obj, name, value
	def __str__(self): return "(%s.%s = %s)" % (self.obj, self.name.lexeme, self.value)

class This(Expr):
	def __init__(self, keyword:Token):
		self.keyword = keyword
	def __str__(self): return "this"

class Unary(Expr):
	def __init__(self, op:Token, right:Expr):
		self.op, self.right = op, right
	def __str__(self): return "(%s%s)" % (self.op.lexeme, self.right)

class Variable(Expr):
	def __init__(self, name:Token):
		self.name = name
	def __str__(self): return self.name.lexeme

###############################################################################
# Statements

class Block(Stmt):
	def __init__(self, statements:Sequence[Stmt]):
		self.statements = statements

class Function(Stmt):
	params: Sequence[Token]
	body: Sequence[Stmt]
	def __init__(self, name:Token, params:Sequence[Token], body:Sequence[Stmt]):
		self.name, self.params, self.body = name, params, body
	def __repr__(self): return "{fn|%s(%s)}" % (self.name.lexeme, ", ".join(p.lexeme for p in self.params))

class Class(Stmt):
	methods: Sequence[Function]
	def __init__(self, name:Token, superclass:Optional[Variable], methods:Sequence[Function]):
		self.name, self.superclass, self.methods = name, superclass, methods

class ExpressionStmt(Stmt):
	def __init__(self, expr:Expr):
		self.expr = expr

class If(Stmt):
	def __init__(self, cond:Expr, then:Stmt, otherwise:Optional[Stmt]=None):
		self.cond, self.then, self.otherwise = cond, then, otherwise

class Print(Stmt):
	def __init__(self, keyword:Token, expr:Expr):
		self.keyword, self.expr = keyword, expr

class Return(Stmt):
	def __init__(self, keyword:Token, value:Optional[Expr]=None):
		self.keyword, self.value = keyword, value

class Var(Stmt):
	def __init__(self, name:Token, init:Optional[Expr]=None):
		self.name, self.init = name, init

class While(Stmt):
	def __init__(self, cond:Expr, body:Stmt):
		self.cond, self.body = cond, body
