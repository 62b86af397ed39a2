"""
A simple, light-weight way to pass-around and manipulate points and spans within a collection of source texts.
The concept is simple: Use integers, with spans of them associated to specific files.
Location zero is the "built-in" location; it has no file and no text.
"""
from bisect import bisect_left
from pathlib import Path
from typing import NamedTuple, Optional

class Span(NamedTuple):
	""" Aimed at whatever prints error messages """
	path: Optional[Path]
	slice: slice

_slices: list[slice] = []
_bounds: list[int] = []
_paths: list[Optional[Path]] = []
_texts: list[Optional[str]] = []

def reset_location_index():
	for it in _slices, _bounds, _paths, _texts: it.clear()
	# Now prepare the "built-in" location, which is location zero:
	start_segment(None)
	insert_token(slice(0,0))

def start_segment(path:Optional[Path], text:Optional[str]=None):
	"""
	Subsequent tokens belong to this path. If the text is supplied,
	diagnostics illustrate from it instead of reading the file.
	"""
	assert isinstance(path, Path) or path is None
	_bounds.append(len(_slices)-1)
	_paths.append(path)
	_texts.append(text)

def insert_token(s:slice) -> int:
	index = len(_slices)
	_slices.append(s)
	return index

def _segment_of(index:int) -> int:
	return bisect_left(_bounds, index)-1

def lookup_token(index:int) -> Span:
	return Span(_paths[_segment_of(index)], _slices[index])

def clamp_span(first:int, last:int) -> tuple[int, int]:
	"""
	A phrase can mix positioned tokens with unpositioned ones, which live at the
	built-in location. Such a span shrinks to whichever end has a real position.
	"""
	left, right = _segment_of(first), _segment_of(last)
	if left == right: return first, last
	if left == 0: return last, last
	return first, first

def lookup_span(first: int, last:int) -> Span:
	first, last = clamp_span(first, last)
	left = lookup_token(first)
	right = lookup_token(last)
	return Span(left.path, slice(left.slice.start, right.slice.stop))

def lookup_text(index:int) -> Optional[str]:
	""" The registered text of the segment holding this token, if any. """
	return _texts[_segment_of(index)]

reset_location_index()
