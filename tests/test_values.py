import math
import unittest

from ori import calculus
from ori.calculus import ObjectType, ArrayType, STRING, NUMBER, BOOLEAN, NULL
from ori.values import (
	StringValue, NumberValue, BooleanValue, ObjectValue, ArrayValue, TypeRef,
	VOID, TRUE, FALSE, truth, magnitude,
)

def number(x): return NumberValue(x)

class TypeAlgebraTests(unittest.TestCase):
	""" Types are structural value-objects. """
	
	def test_independently_built_objects_are_equal(self):
		a = ObjectType({"x": NUMBER, "y": STRING})
		b = ObjectType({"y": STRING, "x": NUMBER})
		self.assertEqual(a, b)
		self.assertEqual(hash(a), hash(b))
		self.assertEqual(1, len({a, b}))
	
	def test_field_types_matter(self):
		self.assertNotEqual(ObjectType({"x": NUMBER}), ObjectType({"x": STRING}))
		self.assertNotEqual(ObjectType({"x": NUMBER}), ObjectType({"x": NUMBER, "y": NUMBER}))
	
	def test_arrays_nest(self):
		self.assertEqual(ArrayType(ArrayType(NUMBER)), calculus.wrap(NUMBER, 2))
		self.assertNotEqual(ArrayType(NUMBER), calculus.wrap(NUMBER, 2))
		self.assertEqual(NUMBER, calculus.wrap(NUMBER, 0))
	
	def test_scalars_differ(self):
		self.assertEqual(4, len({STRING, NUMBER, BOOLEAN, NULL}))
		self.assertNotEqual(NULL, ArrayType(NULL))
	
	def test_render(self):
		self.assertEqual("num[][]", str(calculus.wrap(NUMBER, 2)))
		self.assertEqual("{ a: str, b: bool[] }", str(ObjectType({"b": ArrayType(BOOLEAN), "a": STRING})))
		self.assertEqual("null", str(NULL))

class ProjectionTests(unittest.TestCase):
	
	def test_scalars(self):
		self.assertIs(STRING, StringValue("hi").project())
		self.assertIs(NUMBER, number(1).project())
		self.assertIs(BOOLEAN, TRUE.project())
		self.assertIs(NULL, VOID.project())
	
	def test_projection_is_structural(self):
		self.assertEqual(
			ObjectValue({"a": number(1)}).project(),
			ObjectValue({"a": number(2)}).project(),
		)
	
	def test_array_takes_type_of_first_element(self):
		mixed = ArrayValue([number(1), StringValue("a")])
		self.assertEqual(ArrayType(NUMBER), mixed.project())
	
	def test_empty_array_is_untyped(self):
		self.assertEqual(ArrayType(NULL), ArrayValue([]).project())
	
	def test_type_ref_projects_to_its_type(self):
		shape = ObjectType({"x": NUMBER})
		self.assertEqual(shape, TypeRef(shape).project())

class EqualityTests(unittest.TestCase):
	
	def test_different_kinds_are_unequal(self):
		self.assertNotEqual(TRUE, number(1))
		self.assertNotEqual(FALSE, number(0))
		self.assertNotEqual(StringValue("1"), number(1))
		self.assertNotEqual(VOID, ArrayValue([]))
	
	def test_objects_ignore_field_order(self):
		self.assertEqual(
			ObjectValue({"a": number(1), "b": TRUE}),
			ObjectValue({"b": TRUE, "a": number(1)}),
		)
	
	def test_arrays_respect_order(self):
		self.assertEqual(ArrayValue([number(1), number(2)]), ArrayValue([number(1), number(2)]))
		self.assertNotEqual(ArrayValue([number(1), number(2)]), ArrayValue([number(2), number(1)]))
	
	def test_nan_is_not_itself(self):
		nan = number(math.nan)
		self.assertNotEqual(nan, nan)

class DisplayTests(unittest.TestCase):
	
	def test_scalars(self):
		self.assertEqual("3", str(number(3)))
		self.assertEqual("0.5", str(number(0.5)))
		self.assertEqual("inf", str(number(math.inf)))
		self.assertEqual("-inf", str(number(-math.inf)))
		self.assertEqual("NaN", str(number(math.nan)))
		self.assertEqual("true", str(TRUE))
		self.assertEqual("null", str(VOID))
		self.assertEqual("text", str(StringValue("text")))
	
	def test_structures(self):
		self.assertEqual("[1, 2]", str(ArrayValue([number(1), number(2)])))
		self.assertEqual("{ a: 1, b: x }", str(ObjectValue({"b": StringValue("x"), "a": number(1)})))
		self.assertEqual("num[]", str(TypeRef(ArrayType(NUMBER))))

class CoercionTests(unittest.TestCase):
	
	def test_truth(self):
		self.assertTrue(truth(StringValue("a")))
		self.assertFalse(truth(StringValue("")))
		self.assertTrue(truth(number(0)))
		self.assertFalse(truth(number(-1)))
		self.assertTrue(truth(TRUE))
		self.assertFalse(truth(VOID))
		self.assertIsNone(truth(ArrayValue([TRUE])))
		self.assertIsNone(truth(ObjectValue({})))
	
	def test_magnitude(self):
		self.assertEqual(2.5, magnitude(number(2.5)))
		self.assertEqual(3.0, magnitude(StringValue("abc")))
		self.assertEqual(2.0, magnitude(StringValue("é")))  # bytes, not characters
		self.assertEqual(1.0, magnitude(ArrayValue([VOID])))
		self.assertIsNone(magnitude(TRUE))

if __name__ == '__main__':
	unittest.main()
