"""
The coherence check proper: for each pair of impls, could both apply at once?

* Unify the two trait heads, then the two targets. If either refuses, the
  impls can never meet: Disjoint.
* Otherwise, the unifier has linked some variables into classes. A class
  whose variables must all be one and the same type must meet all of their
  bounds at once. If the joined bound demands something it also forbids
  (directly or through supertraits) then no type fits, and the impls are Disjoint.
* A class that landed on a concrete type, or that includes an unbounded
  variable, cannot prove anything this way.
* Nothing proven? Overlap.

Deciding what to do with a variable unified against a concrete type is future
work: presumably some sort of orphan or specialization rule belongs there.
"""
from typing import NamedTuple, Optional
from . import syntax
from .catalog import Catalog
from .closure import ClosureEngine
from .concrete import EMPTY_BOUND
from .diagnostics import Report
from .elaboration import Elaborator
from .ontology import CoherenceError
from .unification import Unifier, EquivalenceClass

class Verdict:
	def __init__(self, name:str): self._name = name
	def __repr__(self): return self._name
	__str__ = __repr__

OVERLAP = Verdict("Overlap")
DISJOINT = Verdict("Disjoint")

class Judgment(NamedTuple):
	verdict: Verdict
	first: syntax.ImplDecl
	second: syntax.ImplDecl
	def __str__(self): return '%s: "%s" and "%s"' % (self.verdict, self.first, self.second)

class CheckAborted(Exception):
	""" Something about one of these two impls made the whole check impossible. """
	def __init__(self, first:syntax.ImplDecl, second:syntax.ImplDecl, cause:CoherenceError):
		super().__init__(first, second, cause)
		self.first, self.second, self.cause = first, second, cause
	def __str__(self):
		return 'Checking "%s" against "%s": %s' % (self.first, self.second, self.cause)

def check(program:syntax.Program, report:Optional[Report]=None) -> list[Judgment]:
	return CoherenceChecker(Catalog(program), report).check_all()

class CoherenceChecker:
	def __init__(self, catalog:Catalog, report:Optional[Report]=None):
		self._catalog = catalog
		self._report = report

	def check_all(self) -> list[Judgment]:
		""" All or nothing: the first failure aborts the sweep. """
		judgments = []
		for first, second in self._catalog.pairs():
			try: verdict = self.check_pair(first, second)
			except CoherenceError as ex: raise CheckAborted(first, second, ex) from ex
			judgments.append(Judgment(verdict, first, second))
		return judgments

	def check_pair(self, first:syntax.ImplDecl, second:syntax.ImplDecl) -> Verdict:
		elaborator = Elaborator(self._catalog)
		c1 = elaborator.elaborate(first)
		c2 = elaborator.elaborate(second)
		unifier = Unifier()
		if not (unifier.unify_traits(c1.trait, c2.trait) and unifier.unify_types(c1.target, c2.target)):
			self._info("Heads or targets refuse to unify:", first, "/", second)
			return DISJOINT
		self._info("Unified", first, "/", second, "with", unifier.render())
		closure = ClosureEngine(self._catalog, elaborator)
		bounds = {**c1.bounds, **c2.bounds}
		for ec in unifier.equivalence_classes():
			if self._proves_disjoint(ec, bounds, closure):
				return DISJOINT
		return OVERLAP

	def _proves_disjoint(self, ec:EquivalenceClass, bounds:dict, closure:ClosureEngine) -> bool:
		if ec.anchor is not None:
			self._info("  class", sorted(ec.members), "is anchored at", ec.anchor)
			return False
		joined = EMPTY_BOUND
		for var_id in sorted(ec.members):
			b = bounds[var_id]
			if b is None:
				self._info("  class", sorted(ec.members), "has an unbounded member")
				return False
			joined = joined.join(b)
		verdict = closure.is_unsatisfiable(joined)
		self._info("  class", sorted(ec.members), "joins to", joined, "which is", "unsatisfiable" if verdict else "satisfiable")
		return verdict

	def _info(self, *args):
		if self._report is not None:
			self._report.info(*args)
