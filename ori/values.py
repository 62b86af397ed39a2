"""
This module defines the run-time values the evaluator operates in terms of.

Values are plain structural data with no cycles. Like types, they are compared by
structure: two objects with the same fields are equal, and arrays compare element by
element in order. Values of different kinds are simply unequal; in particular
`true` is not `1`, which is why the evaluator does not let Python values play themselves.
"""
import math
from typing import Mapping, Optional, Sequence
from . import calculus
from .calculus import OriType

class OriValue:
	def project(self) -> OriType:
		""" The one structural type this value has. """
		raise NotImplementedError(type(self))
	
	def __init__(self, *key):
		self._key = key
		self._hash = hash(key)
	def __hash__(self): return self._hash
	def __eq__(self, other): return type(self) is type(other) and self._key == other._key
	def __ne__(self, other): return not self == other
	def __repr__(self): return "<%s %s>" % (type(self).__name__, self)

class StringValue(OriValue):
	def __init__(self, text:str):
		assert isinstance(text, str), text
		self.text = text
		super().__init__(text)
	def project(self): return calculus.STRING
	def __str__(self): return self.text
	def octets(self) -> bytes: return self.text.encode("utf-8")

class NumberValue(OriValue):
	def __init__(self, number:float):
		self.number = float(number)
		super().__init__(self.number)
	def project(self): return calculus.NUMBER
	def __eq__(self, other):
		# Float semantics, so NaN is unequal even to itself.
		return type(other) is NumberValue and self.number == other.number
	__hash__ = OriValue.__hash__
	def __str__(self): return display_number(self.number)

class BooleanValue(OriValue):
	def __init__(self, flag:bool):
		self.flag = bool(flag)
		super().__init__(self.flag)
	def project(self): return calculus.BOOLEAN
	def __str__(self): return "true" if self.flag else "false"

class NullValue(OriValue):
	def project(self): return calculus.NULL
	def __str__(self): return "null"

class ObjectValue(OriValue):
	def __init__(self, fields:Mapping[str, OriValue]):
		assert all(isinstance(v, OriValue) for v in fields.values()), fields
		self.fields = dict(fields)
		super().__init__(frozenset(self.fields.items()))
	def project(self):
		return calculus.ObjectType({name: value.project() for name, value in self.fields.items()})
	def __str__(self):
		return "{ %s }" % ", ".join("%s: %s" % (name, self.fields[name]) for name in sorted(self.fields))

class ArrayValue(OriValue):
	def __init__(self, items:Sequence[OriValue]):
		assert all(isinstance(v, OriValue) for v in items), items
		self.items = tuple(items)
		super().__init__(self.items)
	def element_type(self) -> OriType:
		""" An array is typed by its first element; an empty one is untyped (null). """
		return self.items[0].project() if self.items else calculus.NULL
	def project(self): return calculus.ArrayType(self.element_type())
	def __len__(self): return len(self.items)
	def __str__(self): return "[%s]" % ", ".join(map(str, self.items))

class TypeRef(OriValue):
	""" A first-class reference to a type, as produced by evaluating a type expression. """
	def __init__(self, typ:OriType):
		assert isinstance(typ, OriType), typ
		self.typ = typ
		super().__init__(typ)
	def project(self): return self.typ
	def __str__(self): return str(self.typ)

VOID = NullValue()
TRUE = BooleanValue(True)
FALSE = BooleanValue(False)

def display_number(number:float) -> str:
	if math.isnan(number): return "NaN"
	if math.isinf(number): return "inf" if number > 0 else "-inf"
	if number.is_integer() and abs(number) < 1e16: return str(int(number))
	return repr(number)

def truth(value:OriValue) -> Optional[bool]:
	"""
	Coerce a condition to a flag: non-empty strings, non-negative numbers, and true are truthy.
	Null is falsy. Anything else has no truth-value, so the answer is None.
	"""
	if isinstance(value, StringValue): return len(value.text) != 0
	if isinstance(value, NumberValue): return value.number >= 0
	if isinstance(value, BooleanValue): return value.flag
	if isinstance(value, NullValue): return False
	return None

def magnitude(value:OriValue) -> Optional[float]:
	""" Ordering operators compare numbers as themselves, strings and arrays by length. """
	if isinstance(value, NumberValue): return value.number
	if isinstance(value, StringValue): return float(len(value.octets()))
	if isinstance(value, ArrayValue): return float(len(value))
	return None
