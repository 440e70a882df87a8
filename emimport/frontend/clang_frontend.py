# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
libclang frontend: parses a C/C++ source (syntax only) and converts the cursor
tree into `emimport.decls` nodes.

What gets converted:
- struct/class/union -> RecordDecl (immediate members, in order)
- free functions, methods, constructors, destructors, conversion functions
  -> FunctionDecl (signature spellings + libclang's mangled name)
- namespaces and linkage specifications -> ScopeDecl
Templates are not descended: their members have no linkage name. Out-of-line
function definitions are skipped; their in-scope declaration is the one that
counts.

Only declarations spelled in the main file are kept unless `include_headers`
is set.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Sequence

from clang import cindex

from emimport.core.diagnostics import Diagnostic
from emimport.core.span import Span
from emimport.decls import Decl, FunctionDecl, RecordDecl, ScopeDecl, TranslationUnit

_RECORD_KINDS = frozenset(
	{
		cindex.CursorKind.STRUCT_DECL,
		cindex.CursorKind.CLASS_DECL,
		cindex.CursorKind.UNION_DECL,
	}
)
_FUNCTION_KINDS = frozenset(
	{
		cindex.CursorKind.FUNCTION_DECL,
		cindex.CursorKind.CXX_METHOD,
		cindex.CursorKind.CONSTRUCTOR,
		cindex.CursorKind.DESTRUCTOR,
		cindex.CursorKind.CONVERSION_FUNCTION,
	}
)
# Older libclang releases report `extern "C" { ... }` as UNEXPOSED_DECL.
_SCOPE_KINDS = frozenset(
	{
		cindex.CursorKind.NAMESPACE,
		cindex.CursorKind.LINKAGE_SPEC,
		cindex.CursorKind.UNEXPOSED_DECL,
	}
)

_SEVERITY_NAMES = {
	cindex.Diagnostic.Ignored: "ignored",
	cindex.Diagnostic.Note: "note",
	cindex.Diagnostic.Warning: "warning",
	cindex.Diagnostic.Error: "error",
	cindex.Diagnostic.Fatal: "fatal",
}


class FrontendError(ValueError):
	"""libclang could not be loaded, or a source could not be parsed at all."""

	def __init__(self, message: str, *, path: Path | str | None = None) -> None:
		super().__init__(message)
		self.span = Span(file=str(path)) if path is not None else Span()


def configure_libclang(library_file: Path | None) -> None:
	"""Point the bindings at an explicit libclang; must happen before first use."""
	if library_file is None:
		return
	if cindex.Config.loaded:
		if cindex.Config.library_file != str(library_file):
			raise FrontendError(
				f"libclang is already loaded; cannot switch to {library_file}",
				path=library_file,
			)
		return
	cindex.Config.set_library_file(str(library_file))


def create_index() -> cindex.Index:
	try:
		return cindex.Index.create()
	except cindex.LibclangError as err:
		raise FrontendError(f"failed to load libclang: {err}") from err


def load_translation_unit(
	path: Path,
	args: Sequence[str],
	*,
	index: cindex.Index,
	include_headers: bool = False,
) -> tuple[TranslationUnit, list[Diagnostic]]:
	"""
	Parse `path` with compiler `args` and return the declaration tree plus
	frontend diagnostics (errors and fatals only).

	Callers should not traverse a unit whose diagnostics contain errors.
	"""
	# The compile command may carry -working-directory, so relative sources
	# must not be resolved by clang.
	source = path.resolve()
	try:
		tu = index.parse(
			str(source),
			args=list(args),
			options=cindex.TranslationUnit.PARSE_SKIP_FUNCTION_BODIES,
		)
	except cindex.TranslationUnitLoadError as err:
		raise FrontendError(f"failed to parse {path}: {err}", path=path) from err

	diagnostics: list[Diagnostic] = []
	for diag in tu.diagnostics:
		if diag.severity < cindex.Diagnostic.Error:
			continue
		span = Span.from_loc(diag.location)
		if span.file is None:
			span = Span(file=str(path), line=span.line, column=span.column, raw=span.raw)
		diagnostics.append(
			Diagnostic(
				message=diag.spelling,
				phase="frontend",
				severity=_SEVERITY_NAMES.get(diag.severity, "error"),
				span=span,
				notes=[child.spelling for child in diag.children],
			)
		)

	main_file = None if include_headers else str(source)
	decls = tuple(_convert_children(tu.cursor, main_file))
	return TranslationUnit(path=str(path), decls=decls), diagnostics


def _in_file(cursor: cindex.Cursor, main_file: str | None) -> bool:
	if main_file is None:
		return True
	loc_file = cursor.location.file
	if loc_file is None:
		return False
	return Path(loc_file.name).resolve() == Path(main_file)


def _is_out_of_line(cursor: cindex.Cursor) -> bool:
	"""
	A definition such as `void Widget::resize() {}` is spelled outside the
	scope it belongs to. It is a redeclaration of the member (and inherits its
	annotation), so only the in-scope declaration is converted.
	"""
	return cursor.semantic_parent != cursor.lexical_parent


def _annotation(cursor: cindex.Cursor) -> str | None:
	for child in cursor.get_children():
		if child.kind == cindex.CursorKind.ANNOTATE_ATTR:
			return child.spelling
	return None


def _convert_children(cursor: cindex.Cursor, main_file: str | None) -> Iterator[Decl]:
	for child in cursor.get_children():
		if not _in_file(child, main_file):
			continue
		decl = _convert(child, main_file)
		if decl is not None:
			yield decl


def _convert(cursor: cindex.Cursor, main_file: str | None) -> Decl | None:
	kind = cursor.kind
	if kind in _FUNCTION_KINDS:
		if _is_out_of_line(cursor):
			return None
		return _convert_function(cursor)
	if kind in _RECORD_KINDS:
		return RecordDecl(
			name=cursor.spelling,
			members=tuple(_convert_children(cursor, main_file)),
			annotation=_annotation(cursor),
			span=Span.from_loc(cursor.location),
		)
	if kind in _SCOPE_KINDS:
		return ScopeDecl(
			name=cursor.spelling,
			decls=tuple(_convert_children(cursor, main_file)),
			span=Span.from_loc(cursor.location),
		)
	return None


def _convert_function(cursor: cindex.Cursor) -> FunctionDecl:
	fn_type = cursor.type
	# K&R-style `int f();` in C has no prototype and therefore no parameter list.
	if fn_type.kind == cindex.TypeKind.FUNCTIONPROTO:
		param_types = tuple(arg.spelling for arg in fn_type.argument_types())
	else:
		param_types = ()
	return FunctionDecl(
		name=cursor.spelling,
		param_types=param_types,
		return_type=fn_type.get_result().spelling,
		annotation=_annotation(cursor),
		linkage_name=cursor.mangled_name or None,
		span=Span.from_loc(cursor.location),
	)


__all__ = ["FrontendError", "configure_libclang", "create_index", "load_translation_unit"]
