"""
Source text in, syntax.Program out.
The grammar itself lives in Nega.md, next to this file.
"""
import sys
from pathlib import Path
from typing import Optional
from boozetools.macroparse.runtime import TypicalApplication, make_tables
from boozetools.scanning.engine import IterableScanner
from boozetools.parsing.interface import ParseError, END_OF_TOKENS
from . import syntax
from .diagnostics import Report
from .ontology import Nom

class NegaParseError(ParseError):
	""" args are: the terminals the parser could have used, the one it got, and where. """
	pass

_tables = make_tables(Path(__file__).parent/"Nega.md")
_parse_table = _tables['parser']
RESERVED = frozenset(t for t in _parse_table["terminals"] if t.isupper() and t.isalpha())

class NegaParser(TypicalApplication):
	# Scanner actions:
	def scan_ignore(self, yy: IterableScanner): pass

	def scan_word(self, yy: IterableScanner):
		word = yy.match()
		upper = word.upper()
		# Keywords are lower-case only; "For" is a perfectly good name.
		if upper in RESERVED and word.islower():
			yy.token(upper, yy.slice())
		else:
			yy.token("name", Nom(sys.intern(word), yy.slice()))

	def scan_punctuation(self, yy: IterableScanner):
		it = sys.intern(yy.match())
		yy.token(it, yy.slice())

	def on_stuck(self, yy: IterableScanner):
		raise NegaParseError([], yy.match(), yy.slice())

	# Parser actions:
	@staticmethod
	def parse_nothing(): return None
	@staticmethod
	def parse_empty(): return ()
	@staticmethod
	def parse_first(item): return (item,)
	@staticmethod
	def parse_more(some, another): return some + (another,)

	@staticmethod
	def parse_positive(texp): return syntax.Bound((texp,), ())
	@staticmethod
	def parse_negative(texp): return syntax.Bound((), (texp,))
	@staticmethod
	def parse_join(bound, term): return syntax.Bound(bound.positive + term.positive, bound.negative + term.negative)
	@staticmethod
	def parse_without(bound, texp): return syntax.Bound(bound.positive, bound.negative + (texp,))

	def default_parse(self, ctor, *args):
		return getattr(syntax, ctor)(*args)

	def unexpected_token(self, kind, semantic, pds):
		raise NegaParseError(self.expected_tokens(pds), kind, self.yy.slice())

nega_parser = NegaParser(_tables)

def parse_text(text:str, path:Optional[Path], report:Report) -> Optional[syntax.Program]:
	""" Submit text to the parser. On failure, explain in the report and return None. """
	report.set_source(path, text)
	try:
		return nega_parser.parse(text, filename=str(path) if path else None)
	except NegaParseError as ex:
		expected, lookahead, span = ex.args
		hint = _best_hint(expected, lookahead)
		if lookahead == END_OF_TOKENS: report.ran_out_of_tokens(hint)
		else: report.generic_parse_error("'%s'" % text[span], Nom(text[span], span), hint)

def parse_file(path:Path, report:Report) -> Optional[syntax.Program]:
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
	except OSError:
		report.broken_file(path)
	else:
		return parse_text(text, path, report)

##########################
#
#  Hints, by what the parser wanted to see next.
#

_HINTS = {
	"STRUCT": "Every declaration starts with struct, trait, or impl.",
	"{": "Traits and impls end with an empty body: {}",
	"}": "Bodies are always empty here: {}",
	";": "A struct declaration ends with a semicolon.",
	"FOR": "An impl names a trait, then 'for', then the type it applies to.",
	"name": "A name belongs here.",
	">": "Perhaps a missing comma, or an unbalanced '<'.",
	",": "Separate generic parameters with commas.",
}

def _best_hint(expected:list[str], lookahead:str) -> str:
	if lookahead in RESERVED and "name" in expected:
		return "'%s' is a reserved word, so it cannot name anything." % lookahead.lower()
	if not expected:
		return "Names are made of letters, digits, and underscores."
	advice = [_HINTS[t] for t in expected if t in _HINTS]
	return " ".join(["Expected " + " or ".join(map(_describe, expected)) + "."] + advice[:1])

def _describe(terminal:str) -> str:
	if terminal in RESERVED: return "'%s'" % terminal.lower()
	if terminal == "name": return "a name"
	if terminal == END_OF_TOKENS: return "the end of the text"
	return "'%s'" % terminal
