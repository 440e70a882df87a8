# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Descriptor serialization.

One line per import, in the fixed s-expression-like format consumed by the
import linker:

	(kind ["Class"] mangled ["importName"] ("T1" "T2" ...) "Ret")

Strings are written verbatim. The emitter never reorders, deduplicates or
validates; field presence is decided when the descriptor is built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO


@dataclass(frozen=True)
class ImportDescriptor:
	"""
	One function's foreign binding.

	`class_name` is set iff `kind != "func"`; `import_name` is set iff
	`kind != "constructor"`.
	"""

	kind: str
	mangled_name: str
	param_types: tuple[str, ...]
	return_type: str
	class_name: str | None = None
	import_name: str | None = None


def _quote(text: str) -> str:
	return f'"{text}"'


def format_descriptor(desc: ImportDescriptor) -> str:
	"""Render `desc` as a single newline-terminated line."""
	parts = [f"({desc.kind}"]
	if desc.class_name is not None:
		parts.append(_quote(desc.class_name))
	parts.append(desc.mangled_name)
	if desc.import_name is not None:
		parts.append(_quote(desc.import_name))
	params = " ".join(_quote(ty) for ty in desc.param_types)
	parts.append(f"({params})")
	parts.append(_quote(desc.return_type) + ")")
	return " ".join(parts) + "\n"


class DescriptorEmitter:
	"""Appends formatted descriptors to a text sink it does not own."""

	def __init__(self, sink: TextIO) -> None:
		self._sink = sink

	def emit(self, desc: ImportDescriptor) -> None:
		self._sink.write(format_descriptor(desc))


__all__ = ["DescriptorEmitter", "ImportDescriptor", "format_descriptor"]
