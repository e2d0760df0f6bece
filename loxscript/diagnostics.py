import sys, random
from typing import Optional, TextIO
from boozetools.support.failureprone import SourceText, illustration

from .ontology import Token
from .tree_walker.types import LoxRuntimeError

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Confound it', 'Crud', 'Curses', "Crikey",
		'Drat', 'Fiddlesticks', 'Good Grief', "Great Scott", 'Jeepers',
		"Mercy", 'Nuts', 'Rats',
	]

	resignations = [
		'I am undone.',
		'I cannot continue.',
		'I have no idea what the right answer is.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	"""
	Collects compile-time issues from the scanner, parser, and resolver.
	Nothing here throws on an ordinary issue: the passes keep going so
	that several problems can surface in one run. The caller checks
	the aggregate with `ok()` or `sick()` before going further.
	"""
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=50, err:Optional[TextIO]=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues
		self._source = None
		self._err = err
		self.had_runtime_error = False

	@property
	def issues(self): return tuple(self._issues)

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def set_source(self, text:str, filename:Optional[str]=None):
		self._source = SourceText(text, filename=filename) if text else None

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()
		self.had_runtime_error = False

	def _stderr(self) -> TextIO:
		return self._err or sys.stderr

	def info(self, *args):
		if self._verbose:
			print(*args, file=self._stderr())

	# Methods the scanner calls:
	def lexical_error(self, line:int, offset:int, message:str):
		self.issue(Pic(line, "", message, Annotation(self._source, offset, 1)))

	# Methods the parser and resolver call:
	def error(self, token:Token, message:str):
		""" Actually make an entry of an issue """
		where = " at end" if token.kind == "EOF" else " at '%s'" % token.lexeme
		self.issue(Pic(token.line, where, message, Annotation(self._source, token.offset, token.width())))

	# Tree walks recurse. A pathologically deep tree gets this instead:
	def too_much_nesting(self):
		self.issue(Pic(None, "", "Too much nesting.", Annotation(None, 0, 0)))

	# The executive calls this when evaluation blows up:
	def runtime_error(self, error:LoxRuntimeError):
		self.had_runtime_error = True
		print("[line %d] Runtime Error: %s" % (error.token.line, error.message), file=self._stderr())
		self._stderr().flush()

	def stack_overflow(self):
		self.had_runtime_error = True
		print("Runtime Error: Stack overflow.", file=self._stderr())
		self._stderr().flush()

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues, self._stderr(), self._verbose)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

class Annotation:
	""" Points at a stretch of source text, if there is any source text to point at. """
	def __init__(self, source:Optional[SourceText], offset:int, width:int):
		self.source, self.offset, self.width = source, offset, width
	def illustrate(self) -> Optional[str]:
		if self.source is None: return None
		row, col = self.source.find_row_col(self.offset)
		single_line = self.source.line_of_text(row)
		return illustration(single_line, col, self.width, prefix='% 6d |' % row, caption="")

class Pic:
	def __init__(self, line:Optional[int], where:str, message:str, annotation:Annotation):
		self.line, self.where, self.message, self.annotation = line, where, message, annotation
	def headline(self):
		if self.line is None: return "Error%s: %s" % (self.where, self.message)
		return "[line %d] Error%s: %s" % (self.line, self.where, self.message)
	def as_text(self):
		picture = self.annotation.illustrate()
		if picture is None: return self.headline()
		return self.headline() + "\n" + picture

def _bemoan(issues, err:TextIO, verbose:int):
	""" Emit all the issues to the console. """
	if issues and verbose:
		print(_outburst(), file=err)
	for i in issues:
		print(i.as_text() if verbose else i.headline(), file=err)
	err.flush()
