"""
This is the overall control for the run-time:
front end, then resolver, then the evaluator, with the report
deciding at each stage whether it's safe to go on.
"""
import sys, threading
from enum import IntEnum
from typing import Callable, Optional
from ..diagnostics import Report
from ..front_end import parse_text
from ..resolution import resolve
from ..preamble import install_natives
from .evaluator import Interpreter
from .types import LoxRuntimeError

class Outcome(IntEnum):
	""" Conveniently, these are also the process exit codes. """
	OK = 0
	USAGE = 64
	COMPILE_ERROR = 65
	RUNTIME_ERROR = 70

# Lox recursion is Python recursion, a handful of frames per Lox call.
RECURSION_LIMIT = 50_000
STACK_SIZE = 256 * 1024 * 1024

def on_deep_stack(fn, *args):
	"""
	Call fn(*args) on a worker thread with a roomy stack and a raised
	recursion limit, then hand back whatever it returned or raised.
	"""
	result, failure = [], []
	def work():
		try: result.append(fn(*args))
		except BaseException as ex: failure.append(ex)
	if sys.getrecursionlimit() < RECURSION_LIMIT:
		sys.setrecursionlimit(RECURSION_LIMIT)
	previous = threading.stack_size(STACK_SIZE)
	try:
		worker = threading.Thread(target=work, name="lox", daemon=True)
		worker.start()
	finally:
		threading.stack_size(previous)
	worker.join()
	if failure: raise failure[0]
	return result[0]

def fresh_interpreter(out:Callable[[str], None]=print) -> Interpreter:
	interpreter = Interpreter(out)
	install_natives(interpreter)
	return interpreter

class Session:
	"""
	Keeps one interpreter alive across several chunks of source text.
	A script is one chunk; the REPL feeds one line at a time.
	"""
	def __init__(self, report:Report, out:Callable[[str], None]=print, check_only:bool=False):
		self.report = report
		self.interpreter = fresh_interpreter(out)
		self._check_only = check_only

	def run(self, text:str, filename:Optional[str]=None) -> Outcome:
		return on_deep_stack(self._run, text, filename)

	def _run(self, text:str, filename:Optional[str]) -> Outcome:
		report = self.report
		try:
			statements = parse_text(text, report, filename)
			if report.ok():
				report.info("Parsed %d statement(s)." % len(statements))
				# Resolve into a scratch table first, so a broken chunk leaves no trace.
				distances = resolve(statements, report)
		except RecursionError:
			report.too_much_nesting()
		if report.sick():
			report.complain_to_console()
			return Outcome.COMPILE_ERROR
		report.info("Resolved %d local reference(s)." % len(distances))
		if self._check_only:
			return Outcome.OK

		# Entries are keyed by node identity and live as long as the session.
		# A REPL session therefore grows this table by every line it runs.
		self.interpreter.distances.update(distances)
		try:
			self.interpreter.interpret(statements)
		except LoxRuntimeError as error:
			report.runtime_error(error)
			return Outcome.RUNTIME_ERROR
		except RecursionError:
			report.stack_overflow()
			return Outcome.RUNTIME_ERROR
		return Outcome.OK

def run_program(text:str, report:Report, out:Callable[[str], None]=print, filename:Optional[str]=None) -> Outcome:
	return Session(report, out).run(text, filename)
