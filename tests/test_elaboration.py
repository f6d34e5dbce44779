import unittest

from nega import syntax
from nega.syntax import type_expr, param, bound
from nega.catalog import Catalog
from nega.concrete import Constructor, Variable, ConcreteTrait, ConcreteBound
from nega.elaboration import Elaborator
from nega.ontology import Nom, UndefinedSymbolError, ArityError, CyclicSupertraitError

def _catalog(*decls) -> Catalog:
	return Catalog(syntax.Program(tuple(decls)))

def _struct(name, *params):
	return syntax.StructDecl(Nom(name), tuple(param(p) for p in params))

def _trait(name, params=(), supertraits=None):
	return syntax.TraitDecl(Nom(name), tuple(params), supertraits)

def _impl(params, trait_expr, target):
	return syntax.ImplDecl(tuple(params), trait_expr, target)

BASICS = (
	_struct("A"),
	_struct("Vec", "T"),
	_trait("TA"),
	_trait("TP", [param("X")]),
)

class CatalogTests(unittest.TestCase):
	def test_last_declaration_wins(self):
		catalog = _catalog(_struct("Vec", "T"), _struct("Vec"), _trait("T", [param("X")]), _trait("T"))
		self.assertEqual(0, catalog.struct("Vec").arity())
		self.assertEqual((), catalog.trait("T").params)

	def test_duplicate_impls_are_kept(self):
		impl = _impl([], type_expr("TA"), type_expr("A"))
		catalog = _catalog(*BASICS, impl, impl, impl)
		self.assertEqual(3, len(catalog.impls))
		self.assertEqual(3, len(list(catalog.pairs())))

	def test_pairs_come_in_declaration_order(self):
		impls = [_impl([], type_expr("TA"), type_expr(name)) for name in "XYZ"]
		catalog = _catalog(*impls)
		targets = [(a.target.nom.text, b.target.nom.text) for a, b in catalog.pairs()]
		self.assertEqual([("X", "Y"), ("X", "Z"), ("Y", "Z")], targets)

	def test_tables_are_read_only(self):
		catalog = _catalog(*BASICS)
		with self.assertRaises(TypeError):
			catalog.structs["B"] = _struct("B")

	def test_circular_supertraits(self):
		for decls in [
			[_trait("T", supertraits=bound(["T"]))],
			[_trait("Chicken", supertraits=bound(["Egg"])), _trait("Egg", supertraits=bound(["Chicken"]))],
			[_trait("X", supertraits=bound(["Y"])), _trait("Y", supertraits=bound(["Z"])), _trait("Z", supertraits=bound(["TA", "X"])), _trait("TA")],
		]:
			with self.subTest(decls[0].nom.text):
				with self.assertRaises(CyclicSupertraitError):
					_catalog(*decls)

	def test_negative_supertraits_do_not_make_cycles(self):
		_catalog(_trait("T", supertraits=bound([], ["T"])))

	def test_undeclared_supertraits_are_not_yet_a_problem(self):
		_catalog(_trait("T", supertraits=bound(["Ghost"])))

class ElaboratorTests(unittest.TestCase):
	def setUp(self) -> None:
		self.sut = Elaborator(_catalog(*BASICS))

	def test_parameters_become_variables(self):
		impl = _impl(
			[param("P", ["TA"]), param("Q", [type_expr("TP", "P")])],
			type_expr("TP", "Q"),
			type_expr("Vec", "P"),
		)
		concrete = self.sut.elaborate(impl)
		p, q = Variable(0, "P"), Variable(1, "Q")
		self.assertEqual(ConcreteTrait("TP", (q,)), concrete.trait)
		self.assertEqual(Constructor("Vec", [p]), concrete.target)
		self.assertEqual({
			0: ConcreteBound(frozenset([ConcreteTrait("TA")])),
			1: ConcreteBound(frozenset([ConcreteTrait("TP", (p,))])),
		}, concrete.bounds)

	def test_each_impl_gets_fresh_variables(self):
		impl = _impl([param("P"), param("Q")], type_expr("TP", "P"), type_expr("A"))
		self.assertEqual({0: None, 1: None}, self.sut.elaborate(impl).bounds)
		again = self.sut.elaborate(impl)
		self.assertEqual({2: None, 3: None}, again.bounds)
		self.assertEqual(ConcreteTrait("TP", (Variable(2, "P"),)), again.trait)

	def test_negative_bounds(self):
		impl = _impl([param("P", ["TA"], [type_expr("TP", "A")])], type_expr("TP", "P"), type_expr("A"))
		self.assertEqual(
			ConcreteBound(frozenset([ConcreteTrait("TA")]), frozenset([ConcreteTrait("TP", (Constructor("A"),))])),
			self.sut.elaborate(impl).bounds[0],
		)

	def test_later_parameters_are_not_yet_in_scope(self):
		impl = _impl([param("P", [type_expr("TP", "Q")]), param("Q")], type_expr("TP", "P"), type_expr("A"))
		with self.assertRaises(UndefinedSymbolError) as cm:
			self.sut.elaborate(impl)
		self.assertEqual(Nom("Q"), cm.exception.guilty)

	def test_undefined_struct(self):
		with self.assertRaises(UndefinedSymbolError) as cm:
			self.sut.elaborate(_impl([], type_expr("TA"), type_expr("B")))
		self.assertEqual(Nom("B"), cm.exception.guilty)

	def test_wrong_arity(self):
		for target, given, needed in [
			(type_expr("Vec"), 0, 1),
			(type_expr("Vec", "A", "A"), 2, 1),
			(type_expr("A", "A"), 1, 0),
		]:
			with self.subTest(str(target)):
				with self.assertRaises(ArityError) as cm:
					self.sut.elaborate(_impl([], type_expr("TA"), target))
				self.assertEqual((given, needed), (cm.exception.given, cm.exception.needed))
				self.assertTrue(cm.exception.message().startswith("Struct '%s' was given" % target.nom))

	def test_type_parameters_take_no_arguments(self):
		with self.assertRaises(ArityError) as cm:
			self.sut.elaborate(_impl([param("P")], type_expr("TA"), type_expr("P", "A")))
		self.assertTrue(cm.exception.is_parameter)
		self.assertEqual("'P' is a type-parameter, so it takes no type-arguments, but was given 1.", cm.exception.message())

	def test_trait_names_are_taken_on_faith(self):
		concrete = self.sut.elaborate(_impl([], type_expr("Undeclared", "A"), type_expr("A")))
		self.assertEqual(ConcreteTrait("Undeclared", (Constructor("A"),)), concrete.trait)

	def test_outer_environment(self):
		env = {"X": Constructor("A")}
		self.assertEqual(Constructor("Vec", [Constructor("A")]), self.sut.elaborate_type(type_expr("Vec", "X"), env))

if __name__ == '__main__':
	unittest.main()
