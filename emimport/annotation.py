# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parser for `EM_IMPORT:` annotation text.

Declarations opt into import emission with
`__attribute__((annotate("EM_IMPORT:<kind>:<payload>")))`. Anything that does
not start with the prefix is simply not an import annotation; that is the
common case and never an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from lark import Lark, Transformer
from lark.exceptions import UnexpectedInput

_GRAMMAR_PATH = Path(__file__).with_name("annotation.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text(encoding="utf-8")


@dataclass(frozen=True)
class ParsedAnnotation:
	"""
	`kind` is the text before the first separator after the prefix; `payload`
	is everything after it (possibly empty, possibly containing more `:`).

	The payload is an import name on functions and a class name on records.
	"""

	kind: str
	payload: str


class _AnnotationBuilder(Transformer):
	def kind(self, children):
		return str(children[0]) if children else ""

	def payload(self, children):
		return str(children[0]) if children else ""

	def start(self, children):
		kind = children[0]
		payload = children[1] if len(children) > 1 else ""
		return ParsedAnnotation(kind=kind, payload=payload)


_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="contextual",
	start="start",
	maybe_placeholders=False,
)


def parse_annotation(text: str | None) -> ParsedAnnotation | None:
	"""Return the parsed annotation, or None when `text` is not an import annotation."""
	if text is None:
		return None
	try:
		tree = _PARSER.parse(text)
	except UnexpectedInput:
		return None
	return _AnnotationBuilder().transform(tree)


__all__ = ["ParsedAnnotation", "parse_annotation"]
