"""
This is a coherence checker for traits with negative bounds.

{0}

For example:

    nega program.nega

will print, for every pair of impls in program.nega, whether they
could both apply to the same type (Overlap) or never can (Disjoint).

    nega -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

parser = argparse.ArgumentParser(
	prog="nega",
	description="Coherence checker for traits with negative bounds.",
)
parser.add_argument("program", help="try examples/negative_bounds.nega for example.")
parser.add_argument('-v', "--verbose", action="count", help="Explain each pairwise check on stderr.")
parser.add_argument('-o', "--overlaps-only", action="store_true", help="Print only the pairs that overlap.")
parser.add_argument('-s', "--strict", action="store_true", help="Exit with status 2 if any pair overlaps.")

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .front_end import parse_file
	from .ontology import CoherenceError
	from .coherence import check, CheckAborted, OVERLAP
	report = Report(verbose=args.verbose)
	try:
		program = parse_file(Path.cwd() / args.program, report)
		if program is None:
			assert report.sick()
			report.complain_to_console()
			return 1
		try:
			judgments = check(program, report)
		except CheckAborted as ex:
			report.aborted(ex.first, ex.second, ex.cause)
			report.complain_to_console()
			return 1
		except CoherenceError as ex:
			report.cannot_check(ex)
			report.complain_to_console()
			return 1
	except TooManyIssues:
		report.complain_to_console()
		return 1
	for j in judgments:
		if j.verdict is OVERLAP or not args.overlaps_only:
			print(j)
	if args.strict and any(j.verdict is OVERLAP for j in judgments):
		return 2
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
