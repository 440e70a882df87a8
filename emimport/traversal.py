# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Declaration traversal: finds annotated functions and turns them into import
descriptors.

Scoping rules:
- A function is an import candidate when its own annotation parses.
- A record whose annotation parses opens a RecordContext (class name = the
  annotation payload) for its *immediate* function members only. Nested
  records start over with no context.
- Any kind other than "func" needs a class name. A function asking for one
  outside an annotated record fails the whole traversal: the result carries an
  error diagnostic and no descriptor is emitted for that function.

The context is passed down explicitly (never stored on the visitor), so
nothing can leak between sibling subtrees.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Protocol

from emimport.annotation import parse_annotation
from emimport.core.diagnostics import Diagnostic, has_errors
from emimport.decls import Decl, FunctionDecl, RecordDecl, ScopeDecl, TranslationUnit
from emimport.emitter import ImportDescriptor
from emimport.name_resolver import NameResolver

FREE_FUNCTION_KIND = "func"
CONSTRUCTOR_KIND = "constructor"

MISSING_CLASS_CODE = "E-IMPORT-MISSING-CLASS"


class DescriptorSink(Protocol):
	def emit(self, desc: ImportDescriptor) -> None: ...


@dataclass(frozen=True)
class RecordContext:
	class_name: str


@dataclass
class TraversalResult:
	emitted: int = 0
	diagnostics: list[Diagnostic] = field(default_factory=list)

	@property
	def ok(self) -> bool:
		return not has_errors(self.diagnostics)


class MissingClassNameError(ValueError):
	"""Raised inside the visitor; converted to a diagnostic by `run`."""

	def __init__(self, message: str, *, fn: FunctionDecl) -> None:
		super().__init__(message)
		self.fn = fn


class DeclarationTraversal:
	def __init__(self, emitter: DescriptorSink, *, resolver: NameResolver | None = None) -> None:
		self._emitter = emitter
		self._resolver = resolver or NameResolver()

	def run(self, decls: Iterable[Decl]) -> TraversalResult:
		result = TraversalResult()
		try:
			for decl in decls:
				result.emitted += self._visit(decl, None)
		except MissingClassNameError as err:
			result.diagnostics.append(
				Diagnostic(
					message=str(err),
					code=MISSING_CLASS_CODE,
					phase="traverse",
					severity="error",
					span=err.fn.span,
				)
			)
		return result

	def _visit(self, decl: Decl, ctx: RecordContext | None) -> int:
		if isinstance(decl, FunctionDecl):
			return self._visit_function(decl, ctx)
		if isinstance(decl, RecordDecl):
			return self._visit_record(decl)
		if isinstance(decl, ScopeDecl):
			emitted = 0
			for child in decl.decls:
				emitted += self._visit(child, None)
			return emitted
		raise TypeError(f"unexpected declaration node {type(decl).__name__}")

	def _visit_record(self, record: RecordDecl) -> int:
		# The record's own kind is not used; only the payload matters.
		note = parse_annotation(record.annotation)
		ctx = RecordContext(class_name=note.payload) if note is not None else None
		emitted = 0
		for member in record.members:
			emitted += self._visit(member, ctx if isinstance(member, FunctionDecl) else None)
		return emitted

	def _visit_function(self, fn: FunctionDecl, ctx: RecordContext | None) -> int:
		note = parse_annotation(fn.annotation)
		if note is None:
			return 0
		kind = note.kind
		class_name = None
		if kind != FREE_FUNCTION_KIND:
			if ctx is None:
				raise MissingClassNameError(
					f"import kind '{kind}' on '{fn.name}' requires an enclosing EM_IMPORT record annotation",
					fn=fn,
				)
			class_name = ctx.class_name
		import_name = note.payload if kind != CONSTRUCTOR_KIND else None
		self._emitter.emit(
			ImportDescriptor(
				kind=kind,
				class_name=class_name,
				mangled_name=self._resolver.resolve(fn),
				import_name=import_name,
				param_types=tuple(fn.param_types),
				return_type=fn.return_type,
			)
		)
		return 1


def collect_imports(
	unit: TranslationUnit | Iterable[Decl],
	emitter: DescriptorSink,
	*,
	resolver: NameResolver | None = None,
) -> TraversalResult:
	"""Traverse one translation unit (or a bare declaration list) into `emitter`."""
	decls = unit.decls if isinstance(unit, TranslationUnit) else unit
	return DeclarationTraversal(emitter, resolver=resolver).run(decls)


__all__ = [
	"DeclarationTraversal",
	"MissingClassNameError",
	"MISSING_CLASS_CODE",
	"RecordContext",
	"TraversalResult",
	"collect_imports",
]
