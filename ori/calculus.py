"""
The structural type algebra.

Types are value objects: two types are equal exactly when they have the same shape,
no matter where or how often they were built. They hash accordingly, so they can
serve as dictionary keys and set members. Nothing here has identity beyond structure.
"""
from typing import Mapping

class OriType:
	"""Value objects, compared and hashed by their key"""
	def visit(self, visitor:"TypeVisitor"): raise NotImplementedError(type(self))

	def __init__(self, *key):
		self._key = key
		self._hash = hash(key)
	def __hash__(self): return self._hash
	def __eq__(self, other): return type(self) is type(other) and self._key == other._key
	def __ne__(self, other): return not self == other
	def __str__(self) -> str: return self.visit(Render())
	def __repr__(self) -> str: return "<%s>" % self

class StringType(OriType):
	def visit(self, visitor:"TypeVisitor"): return visitor.on_string(self)

class NumberType(OriType):
	def visit(self, visitor:"TypeVisitor"): return visitor.on_number(self)

class BooleanType(OriType):
	def visit(self, visitor:"TypeVisitor"): return visitor.on_boolean(self)

class NullType(OriType):
	def visit(self, visitor:"TypeVisitor"): return visitor.on_null(self)

class ObjectType(OriType):
	""" Field order means nothing: the key is the set of (name, type) pairs. """
	def __init__(self, fields:Mapping[str, OriType]):
		assert all(isinstance(t, OriType) for t in fields.values()), fields
		self.fields = dict(fields)
		super().__init__(frozenset(self.fields.items()))
	def visit(self, visitor:"TypeVisitor"): return visitor.on_object(self)

class ArrayType(OriType):
	def __init__(self, element:OriType):
		assert isinstance(element, OriType), element
		self.element = element
		super().__init__(element)
	def visit(self, visitor:"TypeVisitor"): return visitor.on_array(self)

STRING = StringType()
NUMBER = NumberType()
BOOLEAN = BooleanType()
NULL = NullType()

def wrap(typ:OriType, arrays:int) -> OriType:
	for _ in range(arrays): typ = ArrayType(typ)
	return typ

class TypeVisitor:
	def on_string(self, s:StringType): raise NotImplementedError(type(self))
	def on_number(self, n:NumberType): raise NotImplementedError(type(self))
	def on_boolean(self, b:BooleanType): raise NotImplementedError(type(self))
	def on_null(self, n:NullType): raise NotImplementedError(type(self))
	def on_object(self, o:ObjectType): raise NotImplementedError(type(self))
	def on_array(self, a:ArrayType): raise NotImplementedError(type(self))

class Render(TypeVisitor):
	""" Return a string representation of the type, as a programmer would spell it. """
	def on_string(self, s:StringType): return "str"
	def on_number(self, n:NumberType): return "num"
	def on_boolean(self, b:BooleanType): return "bool"
	def on_null(self, n:NullType): return "null"
	def on_object(self, o:ObjectType):
		fields = ", ".join("%s: %s" % (name, o.fields[name].visit(self)) for name in sorted(o.fields))
		return "{ %s }" % fields
	def on_array(self, a:ArrayType): return a.element.visit(self) + "[]"
