"""
Supertrait obligations and their closure.

If a type implements a trait, it also implements (positively) every supertrait
of that trait, and every supertrait of those, and so on. A bound which
demands some trait while forbidding anything in that trait's closure can
never be met.

Only the positive part of a trait's declared supertraits creates obligations.
"""
from .catalog import Catalog
from .concrete import ConcreteTrait, ConcreteBound
from .elaboration import Elaborator
from .ontology import Nom, UndeclaredTraitError

class ClosureEngine:
	"""
	Memoizes closures for the life of the engine, which is meant to be one pairwise check.
	The catalog has already refused circular supertraits, so the recursion bottoms out.
	"""
	def __init__(self, catalog:Catalog, elaborator:Elaborator):
		self._catalog = catalog
		self._elaborator = elaborator
		self._memo: dict[ConcreteTrait, frozenset[ConcreteTrait]] = {}

	def supertraits_of(self, trait:ConcreteTrait) -> tuple[ConcreteTrait, ...]:
		decl = self._catalog.trait(trait.name)
		if decl is None:
			raise UndeclaredTraitError(Nom(trait.name))
		if decl.supertraits is None:
			return ()
		env = {p.nom.key(): arg for p, arg in zip(decl.params, trait.args)}
		return tuple(self._elaborator.elaborate_trait(t, env) for t in decl.supertraits.positive)

	def transitive_closure(self, trait:ConcreteTrait) -> frozenset[ConcreteTrait]:
		try: return self._memo[trait]
		except KeyError: pass
		result = {trait}
		for sup in self.supertraits_of(trait):
			result.update(self.transitive_closure(sup))
		self._memo[trait] = result = frozenset(result)
		return result

	def implied(self, bound:ConcreteBound) -> frozenset[ConcreteTrait]:
		""" Everything the positive part of a bound obliges a type to implement. """
		result = set()
		for trait in bound.positive:
			result.update(self.transitive_closure(trait))
		return frozenset(result)

	def is_unsatisfiable(self, bound:ConcreteBound) -> bool:
		return not self.implied(bound).isdisjoint(bound.negative)
