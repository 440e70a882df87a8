# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by diagnostics.

A Span can wrap whatever location object the frontend provides (a libclang
`SourceLocation`, for instance) via the `raw` field while also carrying
optional file/line/column info when available.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column plus raw frontend loc)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	raw: Any = None

	@classmethod
	def from_loc(cls, loc: Any) -> "Span":
		"""
		Construct a Span from a frontend location object.

		If `loc` is already a Span, it is returned unchanged. libclang locations
		expose `file` as a File object (or None for builtins), so the name is
		unwrapped here.
		"""
		if loc is None:
			return cls()
		if isinstance(loc, cls):
			return loc
		file = getattr(loc, "file", None) or getattr(loc, "filename", None)
		if file is not None and not isinstance(file, str):
			file = getattr(file, "name", None)
		return cls(
			file=str(file) if file else None,
			line=getattr(loc, "line", None) or None,
			column=getattr(loc, "column", None) or None,
			raw=loc,
		)

	def format_loc(self) -> str:
		"""Render `line:column`, using `?` for unknown parts."""
		line = self.line if self.line is not None else "?"
		column = self.column if self.column is not None else "?"
		return f"{line}:{column}"


__all__ = ["Span"]
