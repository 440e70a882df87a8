# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from types import SimpleNamespace

from emimport.core.diagnostics import Diagnostic, diag_to_json, format_human, has_errors
from emimport.core.span import Span


def test_span_from_libclang_style_location() -> None:
	loc = SimpleNamespace(file=SimpleNamespace(name="/src/a.cpp"), line=4, column=9)
	span = Span.from_loc(loc)
	assert (span.file, span.line, span.column) == ("/src/a.cpp", 4, 9)
	assert span.raw is loc


def test_span_from_builtin_location_is_unknown() -> None:
	span = Span.from_loc(SimpleNamespace(file=None, line=0, column=0))
	assert span.file is None
	assert span.format_loc() == "?:?"


def test_human_rendering() -> None:
	diag = Diagnostic(message="boom", code="E-X", span=Span(file="a.cpp", line=2, column=3))
	assert format_human(diag) == "a.cpp:2:3: error: boom [E-X]"
	assert format_human(Diagnostic(message="m"), default_file="b.cpp") == "b.cpp:?:?: error: m"


def test_json_rendering_falls_back_to_default_file() -> None:
	diag = Diagnostic(message="m", phase="frontend", notes=["n"])
	assert diag_to_json(diag, default_file="x.c") == {
		"phase": "frontend",
		"message": "m",
		"severity": "error",
		"code": None,
		"file": "x.c",
		"line": None,
		"column": None,
		"notes": ["n"],
	}


def test_has_errors_ignores_warnings() -> None:
	assert not has_errors([Diagnostic(message="w", severity="warning")])
	assert has_errors([Diagnostic(message="w", severity="warning"), Diagnostic(message="f", severity="fatal")])
