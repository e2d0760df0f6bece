"""
Scanner and parser, both driven by tables built from Lox.md.

Syntax errors are reported, not raised to the caller. The grammar's error
rule lets the parser skip to the next semicolon, so several errors can come
out of a single pass. If it cannot resynchronize, the result is empty.
"""
import sys
from pathlib import Path
from typing import Optional

from boozetools.macroparse.runtime import TypicalApplication, make_tables
from boozetools.scanning.engine import IterableScanner
from boozetools.parsing.interface import ParseError, END_OF_TOKENS
from . import syntax
from .ontology import Token, Stmt
from .diagnostics import Report

MAX_ARGUMENTS = 255

class LoxParseError(ParseError):
	pass

_tables = make_tables(Path(__file__).parent/"Lox.md")
_parse_table = _tables['parser']
RESERVED = frozenset(t for t in _parse_table["terminals"] if t.isupper() and t.isalpha())

class LoxParser(TypicalApplication):
	"""
	One instance serves every parse, one at a time.
	Line numbers are counted as the scanner goes, which is why
	tokens must be made in order.
	"""
	_report: Optional[Report]

	def __init__(self, tables):
		self._report = None
		super().__init__(tables)

	def bind_scan_actions(self, each_action):
		self._scan_bindings = super().bind_scan_actions(each_action)
		return self._scan_bindings

	def _begin(self, text:str, report:Report):
		self._report = report
		self._text = text
		self._line, self._seen = 1, 0

	def _line_at(self, offset:int) -> int:
		if offset > self._seen:
			self._line += self._text.count("\n", self._seen, offset)
			self._seen = offset
		return self._line

	def _token(self, yy:IterableScanner, kind:str, literal=None):
		yy.token(kind, Token(kind, yy.match(), literal, self._line_at(yy.left), yy.left))

	def _end_token(self) -> Token:
		end = len(self._text)
		return Token("EOF", "", None, self._line_at(end), end)

	def scan_ignore(self, yy: IterableScanner): pass

	def scan_punctuation(self, yy: IterableScanner):
		self._token(yy, sys.intern(yy.match()))

	def scan_number(self, yy: IterableScanner):
		self._token(yy, "number", float(yy.match()))

	def scan_string(self, yy: IterableScanner):
		self._token(yy, "string", yy.match()[1:-1])

	def scan_word(self, yy: IterableScanner):
		word = yy.match()
		upper = word.upper()
		if upper in RESERVED and word == upper.lower(): self._token(yy, upper)
		else: self._token(yy, "name")

	def scan_unterminated(self, yy: IterableScanner):
		self._report.lexical_error(self._line_at(yy.left), yy.left, "Unterminated string.")

	def on_stuck(self, yy: IterableScanner):
		self._report.lexical_error(self._line_at(yy.left), yy.left, "Unexpected character '%s'." % yy.match())

	@staticmethod
	def parse_nothing(): return None
	@staticmethod
	def parse_empty(): return []
	@staticmethod
	def parse_first(item): return [item]
	@staticmethod
	def parse_more(some, another):
		some.append(another)
		return some
	@staticmethod
	def parse_gather(some, another):
		# A declaration that failed to parse arrives as None.
		if another is not None: some.append(another)
		return some

	@staticmethod
	def parse_true(): return syntax.Literal(True)
	@staticmethod
	def parse_false(): return syntax.Literal(False)
	@staticmethod
	def parse_nil(): return syntax.Literal(None)
	@staticmethod
	def parse_literal(token:Token): return syntax.Literal(token.literal)
	@staticmethod
	def parse_superclass(name:Token): return syntax.Variable(name)
	@staticmethod
	def parse_call(callee, args, paren:Token): return syntax.Call(callee, paren, args)

	def parse_assign(self, target, equals:Token, value):
		if isinstance(target, syntax.Variable):
			return syntax.Assign(target.name, value)
		if isinstance(target, syntax.Get):
			return syntax.Set(target.obj, target.name, value)
		# Report, but keep going: the parser isn't confused.
		self._report.error(equals, "Invalid assignment target.")
		return target

	def parse_more_arguments(self, some, comma:Token, another):
		if len(some) >= MAX_ARGUMENTS:
			self._report.error(comma, "Can't have more than %d arguments." % MAX_ARGUMENTS)
		some.append(another)
		return some

	def parse_function(self, name:Token, params:list[Token], body:list[Stmt]):
		for extra in params[MAX_ARGUMENTS:]:
			self._report.error(extra, "Can't have more than %d parameters." % MAX_ARGUMENTS)
		return syntax.Function(name, params, body)

	@staticmethod
	def parse_for_loop(initializer, cond, increment, body):
		""" There is no for-loop in the tree. It becomes a while-loop in a block. """
		if increment is not None:
			body = syntax.Block([body, syntax.ExpressionStmt(increment)])
		if cond is None:
			cond = syntax.Literal(True)
		body = syntax.While(cond, body)
		if initializer is not None:
			body = syntax.Block([initializer, body])
		return body

	@staticmethod
	def default_parse(ctor, *args):
		return getattr(syntax, ctor)(*args)

	def unexpected_token(self, kind, semantic, pds):
		token = self._end_token() if semantic is None else semantic
		expected = frozenset(self.expected_tokens(pds))
		message = _diagnose(self.stack_symbols(pds), expected, kind == END_OF_TOKENS)
		self._report.error(token, message)
		self.exception = LoxParseError(token, message)

	def will_recover(self, tokens):
		return None

	def did_not_recover(self):
		raise self.exception

	def exception_parsing(self, ex: Exception, constructor_id:int, args):
		raise ex from None

	def scan(self, text:str, report:Report) -> list[Token]:
		self._begin(text, report)
		try:
			tokens = [semantic for kind, semantic in IterableScanner(text, self.dfa, self._scan_bindings)]
			tokens.append(self._end_token())
			return tokens
		finally:
			self._report = None

	def parse_program(self, text:str, report:Report, filename:Optional[str]=None) -> list[Stmt]:
		self._begin(text, report)
		try: return self.parse(text, filename=filename)
		except LoxParseError: return []
		finally: self._report = None

lox_parser = LoxParser(_tables)

def scan_text(text:str, report:Report) -> list[Token]:
	report.set_source(text)
	return lox_parser.scan(text, report)

def parse_text(text:str, report:Report, filename:Optional[str]=None) -> list[Stmt]:
	""" Scan and parse in one go. Check the report before trusting the result. """
	report.set_source(text, filename)
	return lox_parser.parse_program(text, report, filename)

##########################
#
#  Parse error messages come from the shape of the parse stack.
#  The nearest symbol that says what construct is underway picks the message.
#

# Terminals which can only begin an expression, never continue one.
_STARTERS = frozenset(["number", "string", "TRUE", "FALSE", "NIL", "THIS", "SUPER", "!"])

_CONTEXT = frozenset([
	"CLASS", "FUN", "VAR", "PRINT", "RETURN", "IF", "WHILE", "FOR", "SUPER",
	"(", ".", "{", "methods", "statements", "for_init", "for_cond",
])

def _diagnose(stack:list[str], expected:frozenset, at_end:bool) -> str:
	if at_end and "}" in expected:
		if stack[-1:] == ["methods"] or stack[-2:] == ["superclass", "{"]:
			return "Expect '}' after class body."
		return "Expect '}' after block."
	if expected & _STARTERS:
		return "Expect expression."
	closed = 0
	for depth in reversed(range(len(stack))):
		symbol = stack[depth]
		if symbol == ")":
			closed += 1
		elif symbol == "(" and closed:
			closed -= 1
		elif symbol in _CONTEXT:
			message = _hint(symbol, stack[:depth], stack[depth+1:])
			if message: return message
	return "Expect expression."

def _hint(symbol:str, below:list[str], above:list[str]) -> Optional[str]:
	under = below[-1] if below else None
	if symbol == "CLASS":
		if not above: return "Expect class name."
		if above == ["name", "<"]: return "Expect superclass name."
		return "Expect '{' before class body."
	if symbol == "FUN": return _function_hint("function", above)
	if symbol == "methods": return _function_hint("method", above)
	if symbol == "{":
		return "Expect method name." if under == "superclass" else "Expect expression."
	if symbol == "(":
		if under == "name":
			if not above or above[-1] == ",": return "Expect parameter name."
			return "Expect ')' after parameters."
		if under == "IF": return "Expect ')' after if condition."
		if under == "WHILE": return "Expect ')' after condition."
		if under == "FOR": return "Expect ';' after expression."
		if under == "expr": return "Expect ')' after arguments."
		return "Expect ')' after expression."
	if symbol in ("IF", "WHILE", "FOR"): return "Expect '(' after '%s'." % symbol.lower()
	if symbol == "VAR":
		return "Expect ';' after variable declaration." if above else "Expect variable name."
	if symbol == "PRINT": return "Expect ';' after value."
	if symbol == "RETURN": return "Expect ';' after return value."
	if symbol == "." and not above:
		return "Expect superclass method name." if under == "SUPER" else "Expect property name after '.'."
	if symbol == "SUPER" and not above: return "Expect '.' after 'super'."
	if symbol == "statements": return "Expect ';' after expression." if above else "Expect expression."
	if symbol == "for_init": return "Expect ';' after loop condition."
	if symbol == "for_cond": return "Expect ')' after for clauses."

def _function_hint(kind:str, above:list[str]) -> str:
	if not above: return "Expect %s name." % kind
	if len(above) == 1: return "Expect '(' after %s name." % kind
	return "Expect '{' before %s body." % kind
