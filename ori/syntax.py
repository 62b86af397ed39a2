"""
The set of parse-nodes in simple form.
An external parser builds these bottom-up; the run-time only ever reads them.
Every node is a Phrase, so any of them can be blamed in a diagnostic.
"""
from pathlib import Path
from typing import Optional, Sequence
from .ontology import Phrase, Nom

class ValueExpression(Phrase): pass

class Statement(Phrase): pass

###############################################################################

class Literal(ValueExpression):
	""" The token text is parsed at evaluation time; the parser guarantees it is well-formed. """
	def __init__(self, token:Nom):
		assert isinstance(token, Nom), token
		self.token = token
	def __str__(self): return "<%s %r>" % (type(self).__name__, self.token.text)
	def left(self): return self.token.left()
	def right(self): return self.token.right()

class StringLiteral(Literal): pass
class NumberLiteral(Literal): pass
class BooleanLiteral(Literal): pass

class Lookup(ValueExpression):
	def __init__(self, nom:Nom): self.nom = nom
	def __str__(self): return self.nom.text
	def left(self): return self.nom.left()
	def right(self): return self.nom.right()

class Call(ValueExpression):
	def __init__(self, nom:Nom, args:Sequence[ValueExpression]):
		self.nom, self.args = nom, list(args)
	
	def __str__(self):
		return "%s(%s)" % (self.nom.text, ', '.join(map(str, self.args)))
	
	def left(self): return self.nom.left()
	def right(self): return (self.args[-1] if self.args else self.nom).right()

class ObjectField(Phrase):
	def __init__(self, nom:Nom, expr:ValueExpression):
		self.nom, self.expr = nom, expr
	def left(self): return self.nom.left()
	def right(self): return self.expr.right()

class ObjectLiteral(ValueExpression):
	def __init__(self, fields:Sequence[ObjectField], brace:Optional[Nom]=None):
		self.fields = list(fields)
		self._brace = brace
	def left(self):
		if self._brace is not None: return self._brace.left()
		return self.fields[0].left() if self.fields else 0
	def right(self): return self.fields[-1].right() if self.fields else self.left()

class ExplicitList(ValueExpression):
	def __init__(self, elts:Sequence[ValueExpression], bracket:Optional[Nom]=None):
		for e in elts:
			assert isinstance(e, ValueExpression), e
		self.elts = list(elts)
		self._bracket = bracket
	def left(self):
		if self._bracket is not None: return self._bracket.left()
		return self.elts[0].left() if self.elts else 0
	def right(self): return self.elts[-1].right() if self.elts else self.left()

class Index(ValueExpression):
	def __init__(self, parent:ValueExpression, index:ValueExpression):
		self.parent, self.index = parent, index
	def __str__(self): return "%s[%s]" % (self.parent, self.index)
	def left(self): return self.parent.left()
	def right(self): return self.index.right()

class TypeReference(ValueExpression):
	""" A named type with some number of array suffixes, as in `num[][]` """
	def __init__(self, base:Nom, arrays:int=0):
		assert arrays >= 0, arrays
		self.base, self.arrays = base, arrays
	def __str__(self): return self.base.text + "[]" * self.arrays
	def left(self): return self.base.left()
	def right(self): return self.base.right()

class TypePair(Phrase):
	""" Serves for both function parameters and the fields of a type declaration. """
	def __init__(self, nom:Nom, kind:ValueExpression):
		self.nom, self.kind = nom, kind
	def __repr__(self): return "<:%s:%s>" % (self.nom.text, self.kind)
	def left(self): return self.nom.left()
	def right(self): return self.kind.right()

class LambdaForm(ValueExpression):
	# Only meaningful on the right of a declaration, where it defines a function.
	def __init__(self, params:Sequence[TypePair], emits:ValueExpression, body:Statement):
		self.params = list(params)
		self.emits = emits
		self.body = body
	def left(self): return (self.params[0] if self.params else self.emits).left()
	def right(self): return self.body.right()

class Cond(ValueExpression):
	def __init__(self, condition:ValueExpression, then_part:Statement, else_part:Optional[Statement]=None, keyword:Optional[Nom]=None):
		self.condition, self.then_part, self.else_part = condition, then_part, else_part
		self._keyword = keyword
	def left(self): return (self._keyword or self.condition).left()
	def right(self): return (self.else_part or self.then_part).right()

class Binary(ValueExpression):
	def __init__(self, lhs:ValueExpression, op:Nom, rhs:ValueExpression):
		self.lhs, self.op, self.rhs = lhs, op, rhs
	def __str__(self): return "(%s %s %s)" % (self.lhs, self.op.text, self.rhs)
	def left(self): return self.lhs.left()
	def right(self): return self.rhs.right()

class Comparison(Binary): pass  # == != < <= > >=
class Arithmetic(Binary): pass  # + - * / % and the compound-assignment spellings
class Chain(Binary): pass  # | &

###############################################################################

class Declaration(Statement):
	mutable: bool
	def __init__(self, nom:Nom, expr:ValueExpression):
		self.nom, self.expr = nom, expr
	def __repr__(self): return "{%s %s}" % (type(self).__name__, self.nom.text)
	def left(self): return self.nom.left()
	def right(self): return self.expr.right()

class ConstantDecl(Declaration):
	""" set name = expr """
	mutable = False

class VariableDecl(Declaration):
	""" var name = expr """
	mutable = True

class Mutation(Statement):
	def __init__(self, nom:Nom, expr:ValueExpression):
		self.nom, self.expr = nom, expr
	def left(self): return self.nom.left()
	def right(self): return self.expr.right()

class TypeDecl(Statement):
	def __init__(self, nom:Nom, fields:Sequence[TypePair]):
		self.nom, self.fields = nom, list(fields)
	def left(self): return self.nom.left()
	def right(self): return (self.fields[-1] if self.fields else self.nom).right()

class Emit(Statement):
	def __init__(self, expr:ValueExpression):
		self.expr = expr
	def left(self): return self.expr.left()
	def right(self): return self.expr.right()

class ImportLib(Statement):
	def __init__(self, path:Sequence[Nom]):
		assert path
		self.path = list(path)
	def relative_path(self) -> str:
		return "/".join(nom.text for nom in self.path) + ".ori"
	def left(self): return self.path[0].left()
	def right(self): return self.path[-1].right()

class Compound(Statement):
	def __init__(self, body:Sequence[Statement]):
		self.body = list(body)
	def left(self): return self.body[0].left() if self.body else 0
	def right(self): return self.body[-1].right() if self.body else 0

class ExprStatement(Statement):
	def __init__(self, expr:ValueExpression):
		self.expr = expr
	def left(self): return self.expr.left()
	def right(self): return self.expr.right()

def as_block(stmt:Statement) -> list[Statement]:
	""" A lone statement where a block belongs is a one-statement block. """
	return stmt.body if isinstance(stmt, Compound) else [stmt]

###############################################################################

class Program:
	source_path: Optional[Path]
	statements: list[Statement]
	def __init__(self, statements:Sequence[Statement], source_path:Optional[Path]=None):
		self.statements = list(statements)
		self.source_path = source_path
