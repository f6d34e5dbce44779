"""
Elaboration: from surface type-expressions to the concrete algebra.

A name means a type-parameter if one is in scope by that name;
otherwise it had better be a declared struct with the right number of arguments.
Trait names are taken on faith here. The closure engine looks them up
if and when it needs their supertraits.
"""
from itertools import count
from typing import Mapping
from . import syntax
from .catalog import Catalog
from .concrete import ConcreteType, Constructor, Variable, ConcreteTrait, ConcreteBound, ConcreteImpl
from .ontology import UndefinedSymbolError, ArityError

ENV = Mapping[str, ConcreteType]
NOTHING_IN_SCOPE: ENV = {}

class Elaborator:
	"""
	One elaborator serves one pairwise comparison.
	Every impl it elaborates draws variable ids from the same counter,
	so variables from different impls never alias.
	"""
	def __init__(self, catalog:Catalog):
		self._catalog = catalog
		self._ids = count()

	def elaborate(self, impl:syntax.ImplDecl) -> ConcreteImpl:
		env = {}
		bounds = {}
		for p in impl.params:
			var = Variable(next(self._ids), p.nom.text)
			# A parameter's own bound sees only the parameters declared before it.
			bounds[var.id] = None if p.bound is None else self.elaborate_bound(p.bound, env)
			env[p.nom.key()] = var
		trait = self.elaborate_trait(impl.trait_expr, env)
		target = self.elaborate_type(impl.target, env)
		return ConcreteImpl(trait, target, bounds)

	def elaborate_bound(self, bound:syntax.Bound, env:ENV) -> ConcreteBound:
		return ConcreteBound(
			frozenset(self.elaborate_trait(t, env) for t in bound.positive),
			frozenset(self.elaborate_trait(t, env) for t in bound.negative),
		)

	def elaborate_trait(self, texp:syntax.TypeExpr, env:ENV) -> ConcreteTrait:
		return ConcreteTrait(texp.nom.key(), tuple(self.elaborate_type(a, env) for a in texp.arguments))

	def elaborate_type(self, texp:syntax.TypeExpr, env:ENV=NOTHING_IN_SCOPE) -> ConcreteType:
		name = texp.nom.key()
		if name in env:
			if texp.arguments:
				# Type-parameters do not take type-arguments themselves.
				raise ArityError(texp.nom, len(texp.arguments), 0, is_parameter=True)
			return env[name]
		struct = self._catalog.struct(name)
		if struct is None:
			raise UndefinedSymbolError(texp.nom)
		if struct.arity() != len(texp.arguments):
			raise ArityError(texp.nom, len(texp.arguments), struct.arity())
		return Constructor(name, (self.elaborate_type(a, env) for a in texp.arguments))
