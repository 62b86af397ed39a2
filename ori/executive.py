"""
Statement execution, and the overall control for a run.

A statement's own result is null, except that an emit statement yields the value
of its expression. A block runs every one of its statements, start to finish;
its result is whatever the last emit statement to run produced.
There is no early exit: statements after an emit still run.
"""
from pathlib import Path
from typing import Optional, Sequence
from boozetools.support.foundation import Visitor
from . import syntax
from .calculus import ObjectType
from .diagnostics import Report
from .evaluator import Evaluator
from .runtime import Context
from .space import AlreadyExists, Variable, Function, TypeAlias
from .values import OriValue, VOID

class Executive(Visitor):
	def __init__(self, context:Context):
		self._context = context
		self.report = context.report
		self.evaluator = Evaluator(context, self)
	
	def compute(self, stmt:syntax.Statement) -> OriValue:
		return self.visit(stmt)
	
	def run(self, block:Sequence[syntax.Statement]) -> OriValue:
		emitted = VOID
		for stmt in block:
			value = self.visit(stmt)
			if isinstance(stmt, syntax.Emit): emitted = value
		return emitted
	
	def _declare(self, nom, symbol):
		try: self._context.declare(nom.text, symbol)
		except AlreadyExists: self.report.already_defined(nom)
	
	def visit_ConstantDecl(self, stmt:syntax.ConstantDecl) -> OriValue:
		return self._assign(stmt)
	
	def visit_VariableDecl(self, stmt:syntax.VariableDecl) -> OriValue:
		return self._assign(stmt)
	
	def _assign(self, stmt:syntax.Declaration) -> OriValue:
		if isinstance(stmt.expr, syntax.LambdaForm):
			self._define_function(stmt.nom, stmt.expr)
		else:
			value = self.evaluator.evaluate(stmt.expr)
			self._declare(stmt.nom, Variable(value, stmt.mutable))
		return VOID
	
	def _define_function(self, nom, form:syntax.LambdaForm):
		if nom.text in self._context.scope:
			self.report.already_defined(nom)
			return
		type_of = self.evaluator.type_of
		params = {p.nom.text: type_of(p.kind) for p in form.params}
		emits = type_of(form.emits)
		self._declare(nom, Function(params, emits, syntax.as_block(form.body)))
	
	def visit_Mutation(self, stmt:syntax.Mutation) -> OriValue:
		nom = stmt.nom
		symbol = self._context.lookup(nom.text)
		if symbol is None:
			self.report.undefined_symbol(nom)
		elif isinstance(symbol, Function):
			self.report.not_assignable(nom, "function")
		elif isinstance(symbol, TypeAlias):
			self.report.not_assignable(nom, "type reference")
		elif not symbol.mutable:
			self.report.constant(nom)
		else:
			value = self.evaluator.evaluate(stmt.expr)
			need, got = symbol.value.project(), value.project()
			if need != got: self.report.bad_assignment(nom, need, got)
			else: self._context.rebind(nom.text, Variable(value, True))
		return VOID
	
	def visit_TypeDecl(self, stmt:syntax.TypeDecl) -> OriValue:
		type_of = self.evaluator.type_of
		fields = {f.nom.text: type_of(f.kind) for f in stmt.fields}
		self._declare(stmt.nom, TypeAlias(ObjectType(fields)))
		return VOID
	
	def visit_Emit(self, stmt:syntax.Emit) -> OriValue:
		return self.evaluator.evaluate(stmt.expr)
	
	def visit_ImportLib(self, stmt:syntax.ImportLib) -> OriValue:
		# Only the existence of the file gets checked; loading it is someone else's job.
		if not self._context.exists(stmt.relative_path()):
			self.report.invalid_path(stmt)
		return VOID
	
	def visit_Compound(self, stmt:syntax.Compound) -> OriValue:
		return self.run(stmt.body)
	
	def visit_ExprStatement(self, stmt:syntax.ExprStatement) -> OriValue:
		self.evaluator.evaluate(stmt.expr)
		return VOID

def run_program(program:syntax.Program, report:Report, *, root:Optional[Path]=None) -> Context:
	"""
	Run the top-level statements in order, from a fresh root scope.
	The outcome is whatever got reported; the context comes back for inspection.
	"""
	context = Context(report, root)
	executive = Executive(context)
	for stmt in program.statements:
		executive.compute(stmt)
	report.info(context.scope.dump())
	return context
