"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest to avoid various circular-import
scenarios. Anything that can be blamed in a diagnostic is a Phrase.
"""

class Phrase:
	def left(self) -> int:
		""" Return the index of the leftmost token of this phrase """
		raise NotImplementedError(type(self))
	def right(self) -> int:
		""" Return the index of the rightmost token of this phrase """
		raise NotImplementedError(type(self))
	def span(self) -> tuple[int, int]: return self.left(), self.right()

class Nom(Phrase):
	""" Representing the occurrence of a name, literal, or operator token anywhere. """
	spot: int  # zero-spot means pre-defined term.
	def __init__(self, text, spot=None):
		assert isinstance(text, str)
		assert isinstance(spot, int) or spot is None, type(spot)
		self.text, self.spot = text, spot or 0
	def __repr__(self): return "<Name %r>" % self.text
	def left(self): return self.spot
	def right(self): return self.spot
