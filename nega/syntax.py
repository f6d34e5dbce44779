"""
The set of parse-nodes in simple form.
The parser calls these constructors bottom-up; tests are free to call them directly.
Every node is an immutable value: equal text makes equal nodes, no matter
where (or whether) it was found in a source file.
Each node prints back as the source text it represents.
"""
from typing import NamedTuple, Optional, Union
from .ontology import Nom

class TypeExpr(NamedTuple):
	""" Either a struct instantiation or a reference to a generic parameter. The elaborator decides. """
	nom: Nom
	arguments: tuple["TypeExpr", ...] = ()
	def span(self): return self.nom.span()
	def __str__(self): return self.nom.text + _angle(self.arguments)

class Bound(NamedTuple):
	positive: tuple[TypeExpr, ...] = ()
	negative: tuple[TypeExpr, ...] = ()
	def __str__(self):
		text = " + ".join(map(str, self.positive))
		for t in self.negative:
			text += " - " + str(t) if text else "-" + str(t)
		return text

class Param(NamedTuple):
	nom: Nom
	bound: Optional[Bound] = None
	def span(self): return self.nom.span()
	def __str__(self):
		return "%s: %s" % (self.nom, self.bound) if self.bound else str(self.nom)

class StructDecl(NamedTuple):
	nom: Nom
	params: tuple[Param, ...] = ()
	def arity(self) -> int: return len(self.params)
	def span(self): return self.nom.span()
	def __str__(self): return "struct %s%s;" % (self.nom, _angle(self.params))

class TraitDecl(NamedTuple):
	nom: Nom
	params: tuple[Param, ...] = ()
	supertraits: Optional[Bound] = None
	def span(self): return self.nom.span()
	def __str__(self):
		sup = ": " + str(self.supertraits) if self.supertraits else ""
		return "trait %s%s%s {}" % (self.nom, _angle(self.params), sup)

class ImplDecl(NamedTuple):
	params: tuple[Param, ...]
	trait_expr: TypeExpr
	target: TypeExpr
	def span(self): return self.trait_expr.span()
	def __str__(self):
		return "impl%s %s for %s {}" % (_angle(self.params), self.trait_expr, self.target)

Decl = Union[StructDecl, TraitDecl, ImplDecl]

class Program(NamedTuple):
	decls: tuple[Decl, ...]
	def impls(self) -> list[ImplDecl]:
		return [d for d in self.decls if isinstance(d, ImplDecl)]
	def __str__(self): return "\n".join(map(str, self.decls))

def _angle(items) -> str:
	if items: return "<" + ", ".join(map(str, items)) + ">"
	else: return ""

#######################################################################
#
#  Shorthand for building syntax by hand, mostly in tests.
#

def type_expr(text:str, *arguments) -> TypeExpr:
	""" Arguments may be TypeExpr nodes or plain names. """
	return TypeExpr(Nom(text), tuple(_as_type_expr(a) for a in arguments))

def _as_type_expr(it) -> TypeExpr:
	return it if isinstance(it, TypeExpr) else type_expr(it)

def bound(positive=(), negative=()) -> Bound:
	return Bound(tuple(map(_as_type_expr, positive)), tuple(map(_as_type_expr, negative)))

def param(text:str, positive=(), negative=()) -> Param:
	if positive or negative: return Param(Nom(text), bound(positive, negative))
	else: return Param(Nom(text))
