"""
Float arithmetic with the semantics the language promises,
plus the operator tables the evaluator dispatches through.
Division and modulo by zero follow IEEE rules rather than raising.
"""
import math
import operator

def divide(a:float, b:float) -> float:
	try: return a / b
	except ZeroDivisionError:
		if a == 0 or math.isnan(a): return math.nan
		return math.copysign(math.inf, a) * math.copysign(1.0, b)

def modulo(a:float, b:float) -> float:
	# Sign follows the dividend, as in C.
	try: return math.fmod(a, b)
	except ValueError: return math.nan

ADDITIVE = frozenset(["+", "+="])

NUMERIC = {
	"-" : operator.sub,
	"-=": operator.sub,
	"*" : operator.mul,
	"*=": operator.mul,
	"/" : divide,
	"/=": divide,
	"%" : modulo,
	"%=": modulo,
}

EQUALITY = {
	"==": operator.eq,
	"!=": operator.ne,
}

RELATIONAL = {
	"<" : operator.lt,
	"<=": operator.le,
	">" : operator.gt,
	">=": operator.ge,
}

LOGICAL = {
	"|": operator.or_,
	"&": operator.and_,
}
