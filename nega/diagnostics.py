import sys, random
from pathlib import Path
from typing import Any, Optional
from boozetools.support.failureprone import SourceText, illustration

from .ontology import CoherenceError

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crud', 'Curses', 'Drat',
		'Fiddlesticks', 'Good Grief', 'Great Scott', 'Heavens', 'Jeepers',
		'Nuts', 'Rats', 'Snot', 'Woe is me',
	]

	resignations = [
		'I cannot tell which impls overlap.',
		'No verdicts this time.',
		'The impls will have to wait.',
		'Coherence is out of reach.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects issues; prints them, and any verbose chatter, on stderr. """
	_issues : list["Pic"]
	_source : Optional[SourceText]

	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues
		self._path = None
		self._source = None

	def sick(self): return bool(self._issues)
	def issues(self): return list(self._issues)

	def issue(self, it:Any):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def set_source(self, path:Optional[Path], text:str):
		""" Spans in subsequent annotations refer to this text. """
		self._path = path
		self._source = SourceText(text, filename=str(path) if path else None)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def annotate(self, node, caption:str="") -> "Annotation":
		return Annotation(self._source, node, caption)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the command-line driver is likely to call:

	def _file_error(self, path:Path, prefix:str):
		self.issue(Pic(prefix+" "+str(path), []))

	def no_such_file(self, path:Path):
		self._file_error(path, "I see no file called")

	def broken_file(self, path:Path):
		self._file_error(path, "Something went pear-shaped while trying to read")

	# Methods the front-end is likely to call:

	def generic_parse_error(self, kind:str, token, hint:str):
		intro = "Got confused by %s." % kind
		problem = [self.annotate(token, "Got confused here")]
		self.issue(Pic(intro, problem, [hint], path=self._path))

	def ran_out_of_tokens(self, hint:str):
		intro = "Ran out of words in %s" % (self._path or "the program")
		self.issue(Pic(intro, [], [hint]))

	# Methods for when the checker gives up:

	def cannot_check(self, ex:CoherenceError):
		self.issue(Pic(ex.message(), [self.annotate(ex.guilty)], path=self._path))

	def aborted(self, first, second, ex:CoherenceError):
		intro = "These two impls could not be checked against each other."
		problem = [
			self.annotate(first, "First"),
			self.annotate(second, "Second"),
			self.annotate(ex.guilty, "Trouble here"),
		]
		self.issue(Pic(intro, problem, [ex.message()], path=self._path))

class Annotation:
	"""
	Points at a phrase in the current source text.
	Phrases built by hand have no location; those just get printed.
	"""
	def __init__(self, source:Optional[SourceText], node, caption:str=""):
		self.source = source
		self.node = node
		self.slice = node.span()
		self.caption = caption
	def illustrate(self):
		if self.source is None or self.slice is None:
			return "       | %s%s" % (self.node, "  <-- "+self.caption if self.caption else "")
		row, col = self.source.find_row_col(self.slice.start)
		single_line = self.source.line_of_text(row)
		width = self.slice.stop - self.slice.start
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=(), path:Optional[Path]=None):
		self._intro, self._anns, self._footer, self._path = intro, anns, footer, path
	def intro(self): return self._intro
	def as_text(self):
		lines = [self._intro, ""]
		if self._path and self._anns:
			lines.append(str(self._path))
		lines.extend(ann.illustrate() for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
