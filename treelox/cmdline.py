"""
This is a tree-walking interpreter for the Lox programming language.

For example:

    treelox program.lox

will run program.lox if possible, or else try to explain why not.

    treelox

with no program starts an interactive prompt. Definitions persist
from one line to the next. An empty line (or end-of-file) quits.

    treelox -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

EX_USAGE = 64

parser = argparse.ArgumentParser(
	prog="treelox",
	description="Tree-walking interpreter for the Lox programming language.",
	epilog=__doc__,
	formatter_class=argparse.RawDescriptionHelpFormatter,
)
parser.add_argument("program", nargs="?", help="A Lox source file. Omit for an interactive prompt.")
parser.add_argument('-c', "--check", action="store_true", help="Check the program but do not actually execute it.")
parser.add_argument('-v', "--verbose", action="count", default=0, help="Say more about what is going on.")
parser.add_argument("--max-issues", type=int, default=None, help="Give up after this many diagnostics.")
parser.add_argument("--recursion-limit", type=int, default=10000, help="Host stack allowance for deeply-recursive programs.")

def run_file(session, path:Path, check:bool) -> int:
	from .session import Outcome
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except OSError as ex:
		print("Could not read %s: %s" % (path, ex), file=sys.stderr)
		return EX_USAGE
	outcome = session.check(text) if check else session.run(text)
	if session.report.sick():
		session.report.complain_to_console()
	elif check:
		print("Looks plausible to me.", file=sys.stderr)
	return outcome.value

def run_prompt(session) -> int:
	from .diagnostics import TooManyIssues
	while True:
		try: line = input("> ")
		except EOFError:
			print()
			break
		if not line.strip(): break
		try: session.run(line)
		except TooManyIssues: pass
		if session.report.sick():
			for d in session.report.diagnostics:
				print(d.header(), file=sys.stderr)
	print("Bye!")
	return 0

def run(args) -> int:
	from .diagnostics import Report, TooManyIssues, Phase
	from .session import Session, Outcome
	sys.setrecursionlimit(max(sys.getrecursionlimit(), args.recursion_limit))
	report = Report(verbose=args.verbose, max_issues=args.max_issues)
	session = Session(report)
	try:
		if args.program is None:
			return run_prompt(session)
		return run_file(session, Path.cwd() / args.program, args.check)
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		if report.sick_in(Phase.RUNTIME, Phase.RESOURCE):
			return Outcome.RUNTIME_FAILURE.value
		return Outcome.STATIC_FAILURE.value

def main():
	args = parser.parse_args()
	exit(run(args))
