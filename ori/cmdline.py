"""
This is the evaluation core of the Ori scripting language.

{0}

For example:

    ori program.json

will run the already-parsed program in program.json, then explain what went wrong, if anything.

    ori -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="ori",
	description="Run an already-parsed Ori program.",
)
parser.add_argument("program", help="a JSON transcript of the parsed program.")
parser.add_argument('-c', "--check", action="store_true", help="Read the transcript but do not actually run the program.")
parser.add_argument('-v', "--verbose", action="count", help="Chatter about progress, and dump the outermost scope at the end.")
parser.add_argument('-m', "--max-issues", type=int, default=None, help="Give up after this many errors.")

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .executive import run_program
	from .front_end import parse_file, TranscriptError
	report = Report(verbose=args.verbose, max_issues=args.max_issues)
	path = Path.cwd() / args.program
	try: program = parse_file(path)
	except (OSError, TranscriptError) as ex:
		print("Could not read %s: %s" % (path, ex), file=sys.stderr)
		return 1
	report.info("Read %d statement(s) from %s" % (len(program.statements), path))
	if program.source_path is not None:
		report.info("Source text is in %s" % program.source_path)
	if args.check:
		print("Looks plausible to me.", file=sys.stderr)
		return 0
	try:
		run_program(program, report)
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after %d errors." % args.max_issues, file=sys.stderr)
		return 1
	report.complain_to_console()
	return 1 if report.sick() else 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
