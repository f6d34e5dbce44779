"""
The unification approach to deciding whether two impls could meet.

A Unifier is a substitution from variable ids to concrete types, grown one
equation at a time. Chains (a variable bound to a variable bound to ...)
are normal; `resolve` follows them to the end.

Argument lists are compared only as far as the shorter one goes.
Extra trailing arguments are ignored rather than treated as a mismatch.
"""
from collections import defaultdict
from typing import NamedTuple, Optional, Iterable
from .concrete import ConcreteType, Constructor, Variable, ConcreteTrait

class EquivalenceClass(NamedTuple):
	""" Variables the unifier linked together, and the constructor they landed on (if any). """
	members: frozenset[int]
	anchor: Optional[Constructor]

class Unifier:
	substitution: dict[int, ConcreteType]

	def __init__(self):
		self.substitution = {}

	def resolve(self, t:ConcreteType) -> ConcreteType:
		if isinstance(t, Variable):
			binding = self.substitution.get(t.id)
			return t if binding is None else self.resolve(binding)
		else:
			assert isinstance(t, Constructor), type(t)
			return Constructor(t.name, (self.resolve(a) for a in t.args))

	def unify_types(self, a:ConcreteType, b:ConcreteType) -> bool:
		a, b = self.resolve(a), self.resolve(b)
		if isinstance(a, Constructor):
			if isinstance(b, Constructor):
				return a.name == b.name and self._unify_each(a.args, b.args)
			else:
				return self._bind(b, a)
		elif isinstance(b, Constructor):
			return self._bind(a, b)
		else:
			if a != b: self.substitution[a.id] = b
			return True

	def unify_traits(self, a:ConcreteTrait, b:ConcreteTrait) -> bool:
		return a.name == b.name and self._unify_each(a.args, b.args)

	def _unify_each(self, xs:Iterable[ConcreteType], ys:Iterable[ConcreteType]) -> bool:
		return all(self.unify_types(x, y) for x, y in zip(xs, ys))

	def _bind(self, var:Variable, ctor:Constructor) -> bool:
		# No variable may stand for a type that contains itself.
		if ctor.mentions(var.id): return False
		self.substitution[var.id] = ctor
		return True

	def equivalence_classes(self) -> list[EquivalenceClass]:
		"""
		Partition every variable the substitution mentions, such that two
		variables share a class exactly when a chain of variable-to-variable
		bindings connects them (in either direction).
		"""
		links = defaultdict(set)
		for var_id, t in self.substitution.items():
			links[var_id]  # Even a variable bound straight to a constructor gets a class.
			if isinstance(t, Variable):
				links[var_id].add(t.id)
				links[t.id].add(var_id)

		seen = set()
		def explore(var_id:int, members:set):
			if var_id not in seen:
				seen.add(var_id)
				members.add(var_id)
				for other in links[var_id]:
					explore(other, members)

		classes = []
		for var_id in sorted(self.substitution):
			if var_id not in seen:
				members = set()
				explore(var_id, members)
				classes.append(EquivalenceClass(frozenset(members), self._anchor(members)))
		classes.sort(key=lambda c: min(c.members))
		return classes

	def _anchor(self, members) -> Optional[Constructor]:
		for var_id in sorted(members):
			binding = self.substitution.get(var_id)
			if isinstance(binding, Constructor):
				return binding
		return None

	def render(self) -> str:
		return ", ".join("#%d := %s" % (k, v) for k, v in sorted(self.substitution.items())) or "(empty)"
