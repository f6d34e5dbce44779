"""
The declaration tables, built once per program.

Later declarations of a struct or trait overwrite earlier ones of the same name.
Impls are kept in order, duplicates and all, because every pair gets checked.

Once built, a catalog is read-only: everybody downstream shares it by reference.
"""
from types import MappingProxyType
from typing import Mapping, Optional
from boozetools.support.foundation import Visitor, strongly_connected_components_hashable
from . import syntax
from .ontology import CyclicSupertraitError

class Catalog:
	structs: Mapping[str, syntax.StructDecl]
	traits: Mapping[str, syntax.TraitDecl]
	impls: tuple[syntax.ImplDecl, ...]

	def __init__(self, program:syntax.Program):
		loader = _Loader()
		for decl in program.decls:
			loader.visit(decl)
		self.structs = MappingProxyType(loader.structs)
		self.traits = MappingProxyType(loader.traits)
		self.impls = tuple(loader.impls)
		_reject_circular_supertraits(self.traits)

	def struct(self, name:str) -> Optional[syntax.StructDecl]:
		return self.structs.get(name)

	def trait(self, name:str) -> Optional[syntax.TraitDecl]:
		return self.traits.get(name)

	def pairs(self):
		""" Each unordered pair of impls, in declaration order. """
		for i, first in enumerate(self.impls):
			for second in self.impls[i+1:]:
				yield first, second

class _Loader(Visitor):
	def __init__(self):
		self.structs, self.traits, self.impls = {}, {}, []
	def visit_StructDecl(self, decl:syntax.StructDecl): self.structs[decl.nom.key()] = decl
	def visit_TraitDecl(self, decl:syntax.TraitDecl): self.traits[decl.nom.key()] = decl
	def visit_ImplDecl(self, decl:syntax.ImplDecl): self.impls.append(decl)

def _reject_circular_supertraits(traits:Mapping[str, syntax.TraitDecl]):
	# Supertraits that name no declared trait cannot be part of a cycle.
	# The closure engine will complain about them if anyone ever asks.
	graph = {name: set() for name in traits}
	for name, decl in traits.items():
		if decl.supertraits:
			graph[name].update(t.nom.key() for t in decl.supertraits.positive if t.nom.key() in traits)
	for scc in strongly_connected_components_hashable(graph):
		if len(scc) == 1:
			node = scc[0]
			if node in graph[node]:
				_cycle(traits, scc)
		else:
			_cycle(traits, scc)

def _cycle(traits, scc):
	noms = tuple(traits[name].nom for name in sorted(scc))
	raise CyclicSupertraitError(noms[0], noms)
