"""
Ori's notion of a name-space with support for nested scopes.

A scope is a symbol table plus the scope it was opened within. Lookup starts
at the innermost scope and walks outward; the first match wins. Declaring a
name fails whenever that name already resolves from here, even in an outer scope.
"""
from abc import ABC
from typing import Iterable, Optional, Sequence
from . import calculus
from .calculus import OriType
from .values import OriValue

class AlreadyExists(KeyError): pass
class Absent(KeyError): pass

class Symbol(ABC):
	""" A named binding in some scope: a variable, a function, or a type alias. """
	pass

class Variable(Symbol):
	def __init__(self, value:OriValue, mutable:bool):
		self.value, self.mutable = value, mutable
	def __str__(self): return "sym:var { value: %s, const: %s }" % (self.value, "false" if self.mutable else "true")

class Function(Symbol):
	"""
	The parameter mapping is in declaration order, which is also the call-argument order.
	The body runs in a fresh scope opened wherever the call happens; there are no closures.
	"""
	def __init__(self, params:dict[str, OriType], emits:OriType, body:Sequence):
		self.params, self.emits, self.body = dict(params), emits, list(body)
	def arity(self): return len(self.params)
	def __str__(self):
		args = ", ".join(map(str, self.params.values()))
		return "sym:func { args: %s, emits: %s }" % (args, self.emits)

class TypeAlias(Symbol):
	def __init__(self, parent:OriType):
		self.parent = parent
	def __str__(self): return "sym:type { parent: %s }" % self.parent

class Scope:
	symbols: dict[str, Symbol]
	parent: Optional["Scope"]
	
	def __init__(self, parent:Optional["Scope"]=None):
		self.symbols = {}
		self.parent = parent
	
	def __contains__(self, name:str) -> bool:
		return self.lookup(name) is not None
	
	def lookup(self, name:str) -> Optional[Symbol]:
		scope = self
		while scope is not None:
			if name in scope.symbols: return scope.symbols[name]
			scope = scope.parent
		return None
	
	def declare(self, name:str, symbol:Symbol) -> Symbol:
		if name in self: raise AlreadyExists(name)
		self.symbols[name] = symbol
		return symbol
	
	def bind(self, name:str, symbol:Symbol) -> Symbol:
		""" Unchecked insertion into this very scope. """
		self.symbols[name] = symbol
		return symbol
	
	def rebind(self, name:str, symbol:Symbol) -> Symbol:
		""" Replace an existing binding in whichever scope holds it. """
		scope = self
		while scope is not None:
			if name in scope.symbols:
				scope.symbols[name] = symbol
				return symbol
			scope = scope.parent
		raise Absent(name)
	
	def child(self) -> "Scope":
		return Scope(self)
	
	def each_symbol(self) -> Iterable[tuple[str, Symbol]]:
		return self.symbols.items()
	
	def dump(self) -> str:
		lines = ["{ name: %s, symbol: %s }" % (name, symbol) for name, symbol in self.each_symbol()]
		return "\n".join(["symbols: "] + lines)

BUILT_IN_TYPES = {
	"str": calculus.STRING,
	"num": calculus.NUMBER,
	"bool": calculus.BOOLEAN,
	"null": calculus.NULL,
}

def root_scope() -> Scope:
	""" A fresh outermost scope, knowing only the built-in type names. """
	root = Scope()
	for name, typ in BUILT_IN_TYPES.items():
		root.declare(name, TypeAlias(typ))
	return root
