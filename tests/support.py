from unittest import mock

from nega.diagnostics import Report

class Silence(Report):
	""" A Report that keeps its issues to itself, for inspection by tests. """
	def __init__(self):
		super().__init__(verbose=False, max_issues=30)
		self.complain_to_console = mock.Mock()
