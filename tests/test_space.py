import unittest

from ori import calculus
from ori.diagnostics import Report
from ori.runtime import Context
from ori.space import Scope, Variable, Function, TypeAlias, AlreadyExists, Absent, root_scope
from ori.values import NumberValue, StringValue

def var(x, mutable=True): return Variable(NumberValue(x), mutable)

class ScopeTests(unittest.TestCase):
	
	def test_root_knows_built_in_types(self):
		root = root_scope()
		for name, typ in [("str", calculus.STRING), ("num", calculus.NUMBER), ("bool", calculus.BOOLEAN), ("null", calculus.NULL)]:
			with self.subTest(name):
				symbol = root.lookup(name)
				self.assertIsInstance(symbol, TypeAlias)
				self.assertEqual(typ, symbol.parent)
	
	def test_lookup_walks_outward(self):
		root = Scope()
		root.declare("x", var(1))
		inner = root.child().child()
		self.assertIs(root.lookup("x"), inner.lookup("x"))
		self.assertIsNone(inner.lookup("y"))
		self.assertIs(root, inner.parent.parent)
	
	def test_declare_refuses_names_visible_from_here(self):
		root = Scope()
		root.declare("x", var(1))
		child = root.child()
		with self.assertRaises(AlreadyExists):
			child.declare("x", var(2))
		with self.assertRaises(AlreadyExists):
			root.declare("x", Function({}, calculus.NULL, []))
	
	def test_sibling_scopes_do_not_collide(self):
		root = Scope()
		root.child().declare("x", var(1))
		root.child().declare("x", var(2))
		self.assertNotIn("x", root)
	
	def test_innermost_binding_wins(self):
		root = Scope()
		root.declare("x", var(1))
		child = root.child()
		child.bind("x", var(2))
		self.assertEqual(NumberValue(2), child.lookup("x").value)
		self.assertEqual(NumberValue(1), root.lookup("x").value)
	
	def test_rebind_replaces_where_found(self):
		root = Scope()
		root.declare("x", var(1))
		child = root.child()
		child.rebind("x", var(5))
		self.assertEqual({}, child.symbols)
		self.assertEqual(NumberValue(5), root.lookup("x").value)
		with self.assertRaises(Absent):
			child.rebind("nope", var(0))
	
	def test_dump(self):
		root = Scope()
		root.declare("x", Variable(StringValue("hi"), False))
		root.declare("f", Function({"a": calculus.NUMBER}, calculus.STRING, []))
		text = root.dump()
		self.assertIn("{ name: x, symbol: sym:var { value: hi, const: true } }", text)
		self.assertIn("sym:func { args: num, emits: str }", text)
		self.assertIn("sym:type", str(TypeAlias(calculus.NUMBER)))

class ContextTests(unittest.TestCase):
	
	def test_enter_and_leave_are_paired(self):
		context = Context(Report())
		root = context.scope
		context.enter()
		context.declare("x", var(1))
		self.assertIsNot(root, context.scope)
		context.leave()
		self.assertIs(root, context.scope)
		self.assertIsNone(context.lookup("x"))
	
	def test_leaving_the_root_does_nothing(self):
		context = Context(Report())
		root = context.scope
		context.leave()
		context.leave()
		self.assertIs(root, context.scope)
		self.assertIsNotNone(context.lookup("num"))

if __name__ == '__main__':
	unittest.main()
