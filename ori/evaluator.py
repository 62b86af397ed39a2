"""
Expression evaluation.

Every rule about types, arity, and operands is enforced here, but softly: a violation
gets reported to the context's Report and the evaluation produces a safe substitute
(null, false, or the unchanged left operand) so that the run carries on and finds
every problem in one pass.
"""
from boozetools.support.foundation import Visitor
from . import syntax, calculus, primitive
from .calculus import OriType
from .runtime import Context
from .space import Variable, Function, TypeAlias
from .values import (
	OriValue, StringValue, NumberValue, BooleanValue, ObjectValue, ArrayValue, TypeRef,
	VOID, TRUE, FALSE, truth, magnitude,
)

BOOLEAN_SPELLING = {"true": TRUE, "false": FALSE}

class Evaluator(Visitor):
	"""
	Turns expression nodes into values. Blocks (function bodies and the branches
	of an if-expression) are handed back to the executive, which knows statements.
	"""
	def __init__(self, context:Context, executive):
		self._context = context
		self._executive = executive
		self.report = context.report
	
	def evaluate(self, expr:syntax.ValueExpression) -> OriValue:
		return self.visit(expr)
	
	def type_of(self, expr:syntax.ValueExpression) -> OriType:
		""" Evaluate a type expression. One that fails to resolve has been reported, and counts as null. """
		value = self.visit(expr)
		return value.typ if isinstance(value, TypeRef) else calculus.NULL
	
	@staticmethod
	def visit_StringLiteral(expr:syntax.StringLiteral) -> OriValue:
		return StringValue(expr.token.text)
	
	@staticmethod
	def visit_NumberLiteral(expr:syntax.NumberLiteral) -> OriValue:
		# A malformed token means the parser broke its contract: let float() raise.
		return NumberValue(float(expr.token.text))
	
	@staticmethod
	def visit_BooleanLiteral(expr:syntax.BooleanLiteral) -> OriValue:
		try: return BOOLEAN_SPELLING[expr.token.text]
		except KeyError: raise ValueError("Not a boolean literal: %r" % expr.token.text) from None
	
	def visit_Lookup(self, expr:syntax.Lookup) -> OriValue:
		nom = expr.nom
		symbol = self._context.lookup(nom.text)
		if symbol is None:
			self.report.undefined_symbol(nom)
			return VOID
		if isinstance(symbol, Variable):
			return symbol.value
		if isinstance(symbol, Function):
			# Naming a function without calling it does nothing useful, but it is no error.
			self._context.bind(nom.text, symbol)
			return VOID
		assert isinstance(symbol, TypeAlias), symbol
		self.report.type_as_value(nom)
		return VOID
	
	def visit_Call(self, site:syntax.Call) -> OriValue:
		symbol = self._context.lookup(site.nom.text)
		if symbol is None:
			self.report.undefined_symbol(site.nom)
			return VOID
		if not isinstance(symbol, Function):
			self.report.not_a_function(site.nom)
			return VOID
		if symbol.arity() != len(site.args):
			self.report.wrong_arity(site, symbol.arity(), len(site.args))
			return VOID
		
		self._context.enter()
		try:
			for (name, need), arg in zip(symbol.params.items(), site.args):
				value = self.visit(arg)
				got = value.project()
				if got != need:
					self.report.bad_argument(site, arg, name, need, got)
					return VOID
				self._context.bind(name, Variable(value, True))
			emitted = self._executive.run(symbol.body)
		finally:
			self._context.leave()
		
		# Advisory only: the wrong-typed result still goes back to the caller.
		got = emitted.project()
		if got != symbol.emits:
			self.report.bad_result(site, symbol.emits, got)
		return emitted
	
	def visit_ObjectLiteral(self, expr:syntax.ObjectLiteral) -> OriValue:
		return ObjectValue({field.nom.text: self.visit(field.expr) for field in expr.fields})
	
	def visit_ExplicitList(self, expr:syntax.ExplicitList) -> OriValue:
		items = []
		first = None
		for elt in expr.elts:
			item = self.visit(elt)
			if first is None:
				first = item.project()
			elif item.project() != first:
				# Reported, but the item stays in the array all the same.
				self.report.mixed_array(elt, item, first)
			items.append(item)
		return ArrayValue(items)
	
	def visit_Index(self, expr:syntax.Index) -> OriValue:
		parent = self.visit(expr.parent)
		index = self.visit(expr.index)
		if not (isinstance(index, NumberValue) and index.number.is_integer() and index.number >= 0):
			self.report.bad_index(expr.index)
			return VOID
		position = int(index.number)
		
		if isinstance(parent, StringValue):
			octets = parent.octets()
			if position >= len(octets):
				self.report.out_of_bounds(expr)
				return VOID
			return StringValue(chr(octets[position]))
		if isinstance(parent, ArrayValue):
			if position >= len(parent):
				self.report.out_of_bounds(expr)
				return VOID
			return parent.items[position]
		self.report.not_indexable(expr, parent.project())
		return VOID
	
	def visit_TypeReference(self, expr:syntax.TypeReference) -> OriValue:
		symbol = self._context.lookup(expr.base.text)
		if symbol is None:
			self.report.undefined_symbol(expr.base)
			return VOID
		if not isinstance(symbol, TypeAlias):
			self.report.not_a_type(expr.base)
			return VOID
		return TypeRef(calculus.wrap(symbol.parent, expr.arrays))
	
	@staticmethod
	def visit_LambdaForm(expr:syntax.LambdaForm) -> OriValue:
		# Lambdas mean something only on the right of a declaration.
		return VOID
	
	def visit_Cond(self, expr:syntax.Cond) -> OriValue:
		condition = self.visit(expr.condition)
		flag = truth(condition)
		if flag is None:
			self.report.no_truth_value(expr.condition, condition.project())
			flag = False
		branch = expr.then_part if flag else expr.else_part
		if branch is None:
			return VOID
		self._context.enter()
		try: return self._executive.run(syntax.as_block(branch))
		finally: self._context.leave()
	
	def visit_Comparison(self, expr:syntax.Comparison) -> OriValue:
		lhs = self.visit(expr.lhs)
		rhs = self.visit(expr.rhs)
		op = expr.op.text
		if op in primitive.EQUALITY:
			return BooleanValue(primitive.EQUALITY[op](lhs, rhs))
		compare = primitive.RELATIONAL[op]
		a, b = magnitude(lhs), magnitude(rhs)
		if a is None or b is None:
			self.report.not_magnitude(expr.op)
			return FALSE
		return BooleanValue(compare(a, b))
	
	def visit_Arithmetic(self, expr:syntax.Arithmetic) -> OriValue:
		lhs = self.visit(expr.lhs)
		rhs = self.visit(expr.rhs)
		op = expr.op.text
		if not isinstance(lhs, (StringValue, NumberValue, ArrayValue)):
			self.report.cannot_operate(expr, lhs.project())
			return lhs
		if op in primitive.ADDITIVE:
			return self._add(expr, lhs, rhs)
		fn = primitive.NUMERIC[op]
		if not (isinstance(lhs, NumberValue) and isinstance(rhs, NumberValue)):
			self.report.numeric_only(expr)
			return lhs
		return NumberValue(fn(lhs.number, rhs.number))
	
	def _add(self, expr:syntax.Arithmetic, lhs:OriValue, rhs:OriValue) -> OriValue:
		""" Plus is overloaded: concatenate text, sum numbers, join or extend arrays. """
		if isinstance(lhs, StringValue):
			return StringValue(lhs.text + str(rhs))
		if isinstance(lhs, NumberValue):
			if isinstance(rhs, NumberValue):
				return NumberValue(lhs.number + rhs.number)
		elif isinstance(rhs, ArrayValue):
			if rhs.project() == lhs.project():
				return ArrayValue(lhs.items + rhs.items)
		elif lhs.element_type() == calculus.NULL:
			return ArrayValue([rhs])
		elif lhs.element_type() == rhs.project():
			return ArrayValue(lhs.items + (rhs,))
		self.report.bad_operands(expr, lhs.project(), rhs.project())
		return VOID
	
	def visit_Chain(self, expr:syntax.Chain) -> OriValue:
		# No short-circuit: both sides always run.
		lhs = self.visit(expr.lhs)
		rhs = self.visit(expr.rhs)
		if not (isinstance(lhs, BooleanValue) and isinstance(rhs, BooleanValue)):
			self.report.not_boolean(expr)
			return FALSE
		return BooleanValue(primitive.LOGICAL[expr.op.text](lhs.flag, rhs.flag))
