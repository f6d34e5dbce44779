"""
These most-fundamental classes are separate from the rest to avoid
circular-import scenarios: the syntax model, the elaborator, the closure
engine and the diagnostics all need to agree on what a name is and on
what can go wrong with one.
"""
from typing import Optional

class Phrase:
	def span(self) -> Optional[slice]:
		""" Return the slice of source text this phrase came from, if known. """
		raise NotImplementedError(type(self))

class Nom(Phrase):
	"""
	Representing the occurrence of a name anywhere.
	Two occurrences of the same text are the same name, wherever they came from.
	"""
	__slots__ = ("text", "spot")

	def __init__(self, text:str, spot:Optional[slice]=None):
		assert isinstance(text, str)
		assert isinstance(spot, slice) or spot is None, type(spot)
		self.text, self.spot = text, spot
	def __repr__(self): return "<Name %r>" % self.text
	def __str__(self): return self.text
	def __eq__(self, other): return isinstance(other, Nom) and self.text == other.text
	def __hash__(self): return hash(self.text)
	def key(self): return self.text
	def span(self): return self.spot

#######################################################################

class CoherenceError(Exception):
	"""
	Anything that makes a program impossible to check.
	The first argument is always the guilty phrase, so diagnostics can point at it.
	"""
	def __init__(self, guilty:Phrase, *details):
		super().__init__(guilty, *details)
		self.guilty = guilty
	def message(self) -> str: raise NotImplementedError(type(self))
	def __str__(self): return self.message()

class UndefinedSymbolError(CoherenceError):
	def message(self):
		return "'%s' is neither a type-parameter in scope nor a declared struct." % self.guilty

class ArityError(CoherenceError):
	def __init__(self, guilty:Phrase, given:int, needed:int, *, is_parameter=False):
		super().__init__(guilty, given, needed)
		self.given, self.needed, self.is_parameter = given, needed, is_parameter
	def message(self):
		if self.is_parameter:
			return "'%s' is a type-parameter, so it takes no type-arguments, but was given %d." % (self.guilty, self.given)
		return "Struct '%s' was given %d type-arguments; %d are needed." % (self.guilty, self.given, self.needed)

class UndeclaredTraitError(CoherenceError):
	def message(self):
		return "Trait '%s' is not declared." % self.guilty

class CyclicSupertraitError(CoherenceError):
	def __init__(self, guilty:Phrase, cycle:tuple):
		super().__init__(guilty, cycle)
		self.cycle = cycle
	def message(self):
		return "These traits are each other's supertraits, in a circle: %s" % ", ".join(map(str, self.cycle))
