# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from typing import Callable

from emimport.core.span import Span
from emimport.decls import FunctionDecl


class NameResolutionError(ValueError):
	"""
	The frontend could not produce a linkage name for an annotated function.

	This is a frontend failure, not a user error; the traversal lets it
	propagate to the driver.
	"""

	def __init__(self, message: str, *, span: Span | None = None) -> None:
		super().__init__(message)
		self.span = span or Span()


def frontend_linkage_name(fn: FunctionDecl) -> str | None:
	return fn.linkage_name


class NameResolver:
	"""
	Maps a function declaration to its linkage-stable (mangled) symbol.

	By default the name the frontend computed while building the declaration
	tree is used; callers can plug in another mangling scheme.
	"""

	def __init__(self, mangle: Callable[[FunctionDecl], str | None] | None = None) -> None:
		self._mangle = mangle or frontend_linkage_name

	def resolve(self, fn: FunctionDecl) -> str:
		name = self._mangle(fn)
		if not name:
			raise NameResolutionError(f"no linkage name available for function '{fn.name}'", span=fn.span)
		return name


__all__ = ["NameResolutionError", "NameResolver", "frontend_linkage_name"]
