"""
The diagnostic sink.

Diagnostics never change control flow: the run-time reports an issue and carries on
with a safe substitute value. Issues accumulate here in evaluation order, and
each one can render itself as text with the offending source line illustrated.
"""
import sys
from functools import lru_cache
from pathlib import Path
from typing import Optional
from boozetools.support.failureprone import SourceText, illustration

from .location import clamp_span, lookup_span, lookup_text
from .ontology import Phrase, Nom
from .calculus import OriType
from . import syntax

ERROR, WARNING, INFO = "error", "warning", "info"
KINDS = (ERROR, WARNING, INFO)

class TooManyIssues(Exception):
	pass

class Report:
	""" Collects issues in the order they arise. """
	issues : list["Pic"]
	
	def __init__(self, *, verbose:int=0, max_issues:Optional[int]=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self.issues = []
		self._max_issues = max_issues
	
	def errors(self) -> list["Pic"]: return [i for i in self.issues if i.kind == ERROR]
	def ok(self): return not self.errors()
	def sick(self): return bool(self.errors())
	
	def issue(self, it:"Pic"):
		self.issues.append(it)
		if it.kind == ERROR and self._max_issues and len(self.errors()) >= self._max_issues:
			raise TooManyIssues(self)
	
	def reset(self):
		self.issues.clear()
	
	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)
	
	def diagnose(self, kind:str, header:str, message:str, guilty:Optional[Phrase]) -> str:
		""" Make an entry of an issue and hand back its rendered text. """
		assert kind in KINDS, kind
		problem = [] if guilty is None else [Annotation(guilty)]
		pic = Pic(kind, header, message, problem)
		self.issue(pic)
		return pic.as_text()
	
	def error(self, header:str, message:str, guilty:Optional[Phrase]) -> str:
		return self.diagnose(ERROR, header, message, guilty)
	
	def warn(self, header:str, message:str, guilty:Optional[Phrase]) -> str:
		return self.diagnose(WARNING, header, message, guilty)
	
	def inform(self, header:str, message:str, guilty:Optional[Phrase]) -> str:
		return self.diagnose(INFO, header, message, guilty)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self.issues)
			
	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self.sick():
			self.complain_to_console()
			raise AssertionError(message)
	
	# Methods the evaluator and executive call:
	
	def undefined_symbol(self, nom:Nom):
		self.error("symbol does not exist", "%r could not be resolved." % nom.text, nom)
	
	def already_defined(self, nom:Nom):
		self.error("symbol already exists", "%r has already been defined." % nom.text, nom)
	
	def type_as_value(self, nom:Nom):
		self.error("invalid reference", "%r is a type, not a value." % nom.text, nom)
	
	def not_a_type(self, nom:Nom):
		self.error("invalid reference", "%r is not a type." % nom.text, nom)
	
	def not_a_function(self, nom:Nom):
		self.error("invalid operation", "%r is not a function." % nom.text, nom)
	
	def wrong_arity(self, site:syntax.Call, need:int, got:int):
		plural = '' if need == 1 else 's'
		pattern = "%r expected %d argument%s, but was given %d."
		self.error("arguments differ in length", pattern % (site.nom.text, need, plural, got), site)
	
	def bad_argument(self, site:syntax.Call, arg:syntax.ValueExpression, param:str, need:OriType, got:OriType):
		pattern = "%r expected %s for %r, but was given %s."
		self.error("mismatched types", pattern % (site.nom.text, need, param, got), arg)
	
	def bad_result(self, site:syntax.Call, need:OriType, got:OriType):
		pattern = "%r expected to emit %s, but emits %s."
		self.error("mismatched types", pattern % (site.nom.text, need, got), site)
	
	def mixed_array(self, elt:syntax.ValueExpression, item, first:OriType):
		self.error("mismatched types", "found %s in %s[]." % (item, first), elt)
	
	def bad_index(self, index:syntax.ValueExpression):
		self.error("invalid expression", "cannot perform index with a non positive integer.", index)
	
	def out_of_bounds(self, expr:syntax.Index):
		self.error("invalid expression", "index out of bounds of parent.", expr)
	
	def not_indexable(self, expr:syntax.Index, typ:OriType):
		self.error("invalid operation", "cannot perform index upon %s." % typ, expr)
	
	def no_truth_value(self, cond:syntax.ValueExpression, typ:OriType):
		self.error("invalid expression", "%s cannot be evaluated to a boolean." % typ, cond)
	
	def not_magnitude(self, op:Nom):
		self.error("invalid operation", "%r is a numeric exclusive comparison operator." % op.text, op)
	
	def cannot_operate(self, expr:syntax.Binary, lhs:OriType):
		self.error("invalid operation", "cannot perform %r upon a %s." % (expr.op.text, lhs), expr.lhs)
	
	def bad_operands(self, expr:syntax.Binary, lhs:OriType, rhs:OriType):
		pattern = "cannot perform %r upon a %s with a %s."
		self.error("invalid operation", pattern % (expr.op.text, lhs, rhs), expr)
	
	def numeric_only(self, expr:syntax.Binary):
		self.error("invalid operation", "%r is an exclusive numeric operation." % expr.op.text, expr)
	
	def not_boolean(self, expr:syntax.Chain):
		self.error("invalid operation", "cannot chain non-boolean values.", expr)
	
	def not_assignable(self, nom:Nom, what:str):
		self.error("invalid operation", "%r is a %s which cannot be assigned to a value." % (nom.text, what), nom)
	
	def constant(self, nom:Nom):
		self.error("invalid operation", "%r is a constant and cannot be reassigned." % nom.text, nom)
	
	def bad_assignment(self, nom:Nom, need:OriType, got:OriType):
		self.error("invalid operation", "%r has been assigned to be %s, not %s." % (nom.text, need, got), nom)
	
	def invalid_path(self, stmt:syntax.ImportLib):
		self.error("invalid path", "%s is not a valid filepath." % stmt.relative_path(), stmt)

class Annotation:
	path: Optional[Path]
	slice: slice
	caption: str
	def __init__(self, node:Phrase, caption:str=""):
		first, last = clamp_span(*node.span())
		span = lookup_span(first, last)
		self.path = span.path
		self.slice = span.slice
		self.text = lookup_text(first)
		self.caption = caption
	def illustrate(self) -> str:
		if self.text is not None: source = SourceText(self.text)
		elif self.path is not None: source = _fetch(self.path)
		else: return self.caption
		row, col = source.find_row_col(self.slice.start)
		single_line = source.line_of_text(row)
		width = max(self.slice.stop - self.slice.start, 1)
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, kind:str, header:str, message:str, anns:list[Annotation]):
		self.kind, self.header, self.message, self._anns = kind, header, message, anns
	def __repr__(self): return "<%s: %s>" % (self.kind, self.header)
	def as_text(self):
		lines = ["%s: %s" % (self.kind, self.header), self.message]
		path = None
		for ann in self._anns:
			if ann.path != path:
				path = ann.path
				lines.append(str(path))
			picture = ann.illustrate()
			if picture: lines.append(picture)
		return '\n'.join(lines)

@lru_cache(5)
def _fetch(path) -> SourceText:
	with open(path, "r", encoding="utf-8") as fh:
		return SourceText(fh.read(), filename=str(path))

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
