"""
The evaluation context the evaluator and the executive share:
the one live scope chain, the diagnostic sink, and the directory imports are checked against.
"""
from pathlib import Path
from typing import Optional
from .diagnostics import Report
from .space import Scope, Symbol, root_scope

class Context:
	scope: Scope
	
	def __init__(self, report:Report, root:Optional[Path]=None):
		self.scope = root_scope()
		self.report = report
		self.root = Path.cwd() if root is None else Path(root)
	
	def lookup(self, name:str) -> Optional[Symbol]:
		return self.scope.lookup(name)
	
	def declare(self, name:str, symbol:Symbol) -> Symbol:
		return self.scope.declare(name, symbol)
	
	def bind(self, name:str, symbol:Symbol) -> Symbol:
		return self.scope.bind(name, symbol)
	
	def rebind(self, name:str, symbol:Symbol) -> Symbol:
		return self.scope.rebind(name, symbol)
	
	def enter(self):
		self.scope = self.scope.child()
	
	def leave(self):
		# Popping the root would leave nothing at all.
		if self.scope.parent is not None:
			self.scope = self.scope.parent
	
	def exists(self, relative_path:str) -> bool:
		""" Whether an imported file is present here or in the lib/ folder. """
		return (self.root / relative_path).exists() or (self.root / "lib" / relative_path).exists()
