"""
This is an interpreter for the Lox scripting language.

For example:

    loxscript program.lox

will run program.lox if possible, or else try to explain why not.

    loxscript

with no program starts an interactive prompt.

    loxscript -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="loxscript",
	description="Tree-walking interpreter for the Lox scripting language.",
)
parser.add_argument("program", nargs="?", help="a Lox source file; omit it for an interactive prompt.")
parser.add_argument('-c', "--check", action="store_true", help="Check the program (scan, parse, resolve) but do not actually execute it.")
parser.add_argument('-v', "--verbose", action="count", help="Explain more about what's going on, and draw pictures of errors.")

def run(args) -> int:
	from .diagnostics import Report, TooManyIssues
	from .tree_walker.executive import Session, Outcome
	report = Report(verbose=args.verbose)
	session = Session(report, check_only=args.check)
	if args.program is None:
		return repl(session)
	path = Path.cwd() / args.program
	try:
		text = path.read_text(encoding="utf-8")
	except OSError as ex:
		print("Could not read %s: %s" % (path, ex.strerror), file=sys.stderr)
		return Outcome.USAGE
	try:
		outcome = session.run(text, str(path))
	except TooManyIssues:
		report.complain_to_console()
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return Outcome.COMPILE_ERROR
	if args.check and outcome == Outcome.OK:
		print("Looks plausible to me.", file=sys.stderr)
	return outcome

def repl(session) -> int:
	""" Each line is its own program, but the globals stick around. """
	from .diagnostics import TooManyIssues
	while True:
		try: line = input("> ")
		except EOFError:
			print()
			return 0
		try: session.run(line)
		except TooManyIssues: session.report.complain_to_console()
		session.report.reset()

def main():
	sys.exit(int(run(parser.parse_args())))
