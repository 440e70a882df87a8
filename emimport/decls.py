# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Declaration tree handed to the import traversal.

The frontend (libclang, see `emimport.frontend`) produces these nodes; tests
build them directly. Only the shapes the traversal cares about are modeled:
records, functions, and transparent scopes (namespaces, `extern "C"` blocks).
Type spellings are already projected to text by the frontend.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from emimport.core.span import Span


@dataclass(frozen=True)
class FunctionDecl:
	name: str
	param_types: tuple[str, ...] = ()
	return_type: str = "void"
	annotation: str | None = None
	# Linker-visible symbol as computed by the frontend (None when unavailable).
	linkage_name: str | None = None
	span: Span = field(default_factory=Span)


@dataclass(frozen=True)
class RecordDecl:
	"""A struct/class/union; `members` are its immediate declarations in order."""

	name: str
	members: tuple["Decl", ...] = ()
	annotation: str | None = None
	span: Span = field(default_factory=Span)


@dataclass(frozen=True)
class ScopeDecl:
	"""A container that carries no import semantics of its own."""

	name: str
	decls: tuple["Decl", ...] = ()
	span: Span = field(default_factory=Span)


Decl = FunctionDecl | RecordDecl | ScopeDecl


@dataclass(frozen=True)
class TranslationUnit:
	path: str
	decls: tuple[Decl, ...] = ()


__all__ = ["Decl", "FunctionDecl", "RecordDecl", "ScopeDecl", "TranslationUnit"]
