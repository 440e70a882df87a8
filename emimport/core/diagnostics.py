# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for the frontend, traversal and driver.

A diagnostic is a message plus optional code/phase/span. Rendering lives here
too so the CLI and tests agree on the human and JSON shapes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .span import Span


@dataclass
class Diagnostic:
	"""Represents an em-import diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# Which part of the run produced it: "frontend", "traverse", "resolve" or
	# "output".
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Span() denotes unknown.
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()


def has_errors(diagnostics: list[Diagnostic]) -> bool:
	return any(d.severity in ("error", "fatal") for d in diagnostics)


def format_human(diag: Diagnostic, *, default_file: str | None = None) -> str:
	"""Render `file:line:column: severity: message` (compiler style)."""
	file = diag.span.file or default_file or "<unknown>"
	text = f"{file}:{diag.span.format_loc()}: {diag.severity}: {diag.message}"
	if diag.code:
		text += f" [{diag.code}]"
	return text


def diag_to_json(diag: Diagnostic, *, default_file: str | None = None) -> dict[str, Any]:
	"""Render a Diagnostic to a structured JSON-friendly dict."""
	return {
		"phase": diag.phase,
		"message": diag.message,
		"severity": diag.severity,
		"code": diag.code,
		"file": diag.span.file or default_file,
		"line": diag.span.line,
		"column": diag.span.column,
		"notes": list(diag.notes),
	}


__all__ = ["Diagnostic", "has_errors", "format_human", "diag_to_json"]
