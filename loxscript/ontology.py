"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest to avoid various circular-import
scenarios. Tokens come out of the scanner and then live on
inside the syntax tree, where diagnostics use them for location.
"""
from typing import Any

CONSTRUCTOR_NAME = "init"
THIS = "this"
SUPER = "super"

class Token:
	"""
	Representing the occurrence of a lexeme anywhere.
	The offset is the character position within the source text,
	which the diagnostics use to draw a picture of the problem.
	"""
	__slots__ = ("kind", "lexeme", "literal", "line", "offset")
	
	def __init__(self, kind:str, lexeme:str, literal:Any, line:int, offset:int=0):
		self.kind, self.lexeme, self.literal = kind, lexeme, literal
		self.line, self.offset = line, offset
	
	def __repr__(self): return "<%s %r>" % (self.kind, self.lexeme)
	
	def width(self): return max(len(self.lexeme), 1)

class Expr:
	"""
	Expressions hash by identity, which is just what the resolver needs:
	two identical-looking expressions at different places resolve independently.
	"""

class Stmt:
	pass
