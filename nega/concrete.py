"""
The Algebra of Coherence Checking
=================================

Elaboration turns surface syntax into the types defined here.
Every generic parameter becomes a Variable with an integer identity,
and every struct instantiation becomes a Constructor.

These live for exactly one pairwise impl comparison.

Equality is loose for constructors: two constructors with the
same name are equal if their arguments agree as far as the shorter list goes.
That is why a constructor hashes on its name alone.
---------------------------------------------------------------------------
"""
from typing import NamedTuple, Optional, Iterable

class ConcreteType:
	def render(self) -> str: raise NotImplementedError(type(self))
	def __str__(self): return self.render()
	def mentions(self, var_id:int) -> bool: raise NotImplementedError(type(self))

class Constructor(ConcreteType):
	__slots__ = ("name", "args")

	def __init__(self, name:str, args:Iterable[ConcreteType]=()):
		self.name = name
		self.args = tuple(args)
		assert all(isinstance(a, ConcreteType) for a in self.args)

	def __eq__(self, other):
		if not isinstance(other, Constructor): return False
		return self.name == other.name and all(a == b for a, b in zip(self.args, other.args))

	def __hash__(self): return hash(("Constructor", self.name))
	def __repr__(self): return "<Constructor %s>" % self.render()
	def render(self) -> str: return self.name + _angle(self.args)
	def mentions(self, var_id:int) -> bool:
		return any(a.mentions(var_id) for a in self.args)

class Variable(ConcreteType):
	""" Identity is the id; the display name is only for humans. """
	__slots__ = ("id", "display_name")

	def __init__(self, id:int, display_name:str):
		self.id, self.display_name = id, display_name
	def __eq__(self, other): return isinstance(other, Variable) and self.id == other.id
	def __hash__(self): return hash(("Variable", self.id))
	def __repr__(self): return "<Variable %s#%d>" % (self.display_name, self.id)
	def render(self) -> str: return self.display_name
	def mentions(self, var_id:int) -> bool: return self.id == var_id

class ConcreteTrait(NamedTuple):
	name: str
	args: tuple[ConcreteType, ...] = ()
	def __str__(self): return self.name + _angle(self.args)

class ConcreteBound(NamedTuple):
	positive: frozenset = frozenset()
	negative: frozenset = frozenset()

	def join(self, other:"ConcreteBound") -> "ConcreteBound":
		return ConcreteBound(self.positive | other.positive, self.negative | other.negative)

	def __str__(self):
		# Sorted only so that the same bound always prints the same way.
		text = " + ".join(sorted(map(str, self.positive)))
		for t in sorted(map(str, self.negative)):
			text += " - %s" % t if text else "-%s" % t
		return text or "(no bound)"

EMPTY_BOUND = ConcreteBound()

class ConcreteImpl(NamedTuple):
	""" An impl with its parameters replaced by variables; `bounds` is keyed by variable id. """
	trait: ConcreteTrait
	target: ConcreteType
	bounds: dict[int, Optional[ConcreteBound]]

def _angle(args) -> str:
	if args: return "<" + ", ".join(a.render() for a in args) + ">"
	else: return ""
