"""
Read a transcript of an already-parsed program.

Scanning and parsing Ori source text is a job for some other program.
What arrives here is the tree it built, spelled as JSON:

	{"source": "hello.ori", "program": [statement, ...]}

A token is a bare string, or {"text": ..., "at": [start, stop]} with character
offsets into the source file so that diagnostics can point at the right spot.
Each statement or expression is an object told apart by its leading key;
README.md lists them all.
"""
import json
from pathlib import Path
from typing import Any, Optional
from . import syntax
from .ontology import Nom
from .location import start_segment, insert_token

class TranscriptError(ValueError):
	""" The transcript does not describe a well-formed tree. """
	pass

def parse_file(path:Path) -> syntax.Program:
	with open(path, "r", encoding="utf-8") as fh:
		return parse_text(fh.read(), path)

def parse_text(text:str, path:Optional[Path]=None) -> syntax.Program:
	try: document = json.loads(text)
	except json.JSONDecodeError as ex: raise TranscriptError("Not JSON: %s" % ex) from ex
	if not isinstance(document, dict) or not isinstance(document.get("program"), list):
		raise TranscriptError("A transcript is an object with a 'program' list.")
	source_path = _register_source(document.get("source"), path)
	reader = Transcript()
	return syntax.Program([reader.statement(s) for s in document["program"]], source_path)

def _register_source(source:Optional[str], transcript_path:Optional[Path]) -> Optional[Path]:
	if source is None:
		start_segment(None)
		return None
	source_path = Path(source)
	if transcript_path is not None and not source_path.is_absolute():
		source_path = Path(transcript_path).parent / source_path
	try:
		with open(source_path, "r", encoding="utf-8") as fh: text = fh.read()
	except OSError:
		start_segment(None)
	else:
		start_segment(source_path, text)
	return source_path

class Transcript:
	""" Decodes the JSON spelling of the tree, one node at a time. """
	
	def token(self, it:Any) -> Nom:
		if isinstance(it, str):
			return Nom(it)
		if isinstance(it, dict) and isinstance(it.get("text"), str):
			at = it.get("at")
			if at is None: return Nom(it["text"])
			start, stop = at
			return Nom(it["text"], insert_token(slice(start, stop)))
		raise TranscriptError("Not a token: %r" % (it,))
	
	def statement(self, node:Any) -> syntax.Statement:
		return self._dispatch(node, STATEMENTS, "statement")
	
	def expression(self, node:Any) -> syntax.ValueExpression:
		return self._dispatch(node, EXPRESSIONS, "expression")
	
	def _dispatch(self, node, table, what):
		if isinstance(node, dict):
			for key, method in table.items():
				if key in node: return method(self, node)
		raise TranscriptError("Not a %s: %r" % (what, node))
	
	def _field(self, node, key):
		try: return node[key]
		except KeyError: raise TranscriptError("Missing %r in %r" % (key, node)) from None
	
	def _pairs(self, items) -> list[syntax.TypePair]:
		return [syntax.TypePair(self.token(self._field(p, "name")), self.expression(self._field(p, "kind"))) for p in items]
	
	# Statements
	
	def _set(self, node): return syntax.ConstantDecl(self.token(node["set"]), self.expression(self._field(node, "value")))
	def _var(self, node): return syntax.VariableDecl(self.token(node["var"]), self.expression(self._field(node, "value")))
	def _change(self, node): return syntax.Mutation(self.token(node["change"]), self.expression(self._field(node, "value")))
	def _type_decl(self, node): return syntax.TypeDecl(self.token(node["type"]), self._pairs(self._field(node, "fields")))
	def _emit(self, node): return syntax.Emit(self.expression(node["emit"]))
	def _import(self, node):
		path = node["import"]
		if not path: raise TranscriptError("An import needs a path.")
		return syntax.ImportLib([self.token(t) for t in path])
	def _block(self, node): return syntax.Compound([self.statement(s) for s in node["block"]])
	def _expr(self, node): return syntax.ExprStatement(self.expression(node["expr"]))
	
	# Expressions
	
	def _string(self, node): return syntax.StringLiteral(self.token(node["string"]))
	def _number(self, node): return syntax.NumberLiteral(self.token(node["number"]))
	def _boolean(self, node): return syntax.BooleanLiteral(self.token(node["boolean"]))
	def _ref(self, node): return syntax.Lookup(self.token(node["ref"]))
	def _call(self, node):
		return syntax.Call(self.token(node["call"]), [self.expression(a) for a in node.get("args", ())])
	def _object(self, node):
		fields = [
			syntax.ObjectField(self.token(self._field(f, "name")), self.expression(self._field(f, "value")))
			for f in node["object"]
		]
		return syntax.ObjectLiteral(fields)
	def _array(self, node): return syntax.ExplicitList([self.expression(e) for e in node["array"]])
	def _index(self, node): return syntax.Index(self.expression(self._field(node, "of")), self.expression(node["index"]))
	def _lambda(self, node):
		params = self._pairs(node["lambda"])
		return syntax.LambdaForm(params, self.expression(self._field(node, "emits")), self.statement(self._field(node, "body")))
	def _if(self, node):
		else_part = node.get("else")
		return syntax.Cond(
			self.expression(node["if"]),
			self.statement(self._field(node, "then")),
			None if else_part is None else self.statement(else_part),
		)
	def _type_ref(self, node):
		arrays = node.get("arrays", 0)
		if not isinstance(arrays, int) or arrays < 0: raise TranscriptError("Bad array count: %r" % (arrays,))
		return syntax.TypeReference(self.token(node["type"]), arrays)

def _binary(cls, key):
	def decode(reader:Transcript, node):
		lhs = reader.expression(reader._field(node, "lhs"))
		return cls(lhs, reader.token(node[key]), reader.expression(reader._field(node, "rhs")))
	return decode

STATEMENTS = {
	"set": Transcript._set,
	"var": Transcript._var,
	"change": Transcript._change,
	"type": Transcript._type_decl,
	"emit": Transcript._emit,
	"import": Transcript._import,
	"block": Transcript._block,
	"expr": Transcript._expr,
}

EXPRESSIONS = {
	"string": Transcript._string,
	"number": Transcript._number,
	"boolean": Transcript._boolean,
	"ref": Transcript._ref,
	"call": Transcript._call,
	"object": Transcript._object,
	"array": Transcript._array,
	"index": Transcript._index,
	"lambda": Transcript._lambda,
	"if": Transcript._if,
	"compare": _binary(syntax.Comparison, "compare"),
	"math": _binary(syntax.Arithmetic, "math"),
	"chain": _binary(syntax.Chain, "chain"),
	"type": Transcript._type_ref,
}
