# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import io
from pathlib import Path

from emimport.decls import FunctionDecl, RecordDecl, ScopeDecl
from emimport.emitter import DescriptorEmitter
from emimport.frontend import load_translation_unit
from emimport.traversal import collect_imports


def _write(path: Path, text: str) -> Path:
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(text, encoding="utf-8")
	return path


def test_c_function_signature_and_annotation(tmp_path: Path, clang_index) -> None:
	src = _write(
		tmp_path / "add.c",
		"""
int add(int a, int b) __attribute__((annotate("EM_IMPORT:func:jsAdd")));
int plain(void);
""".lstrip(),
	)
	unit, diags = load_translation_unit(src, [], index=clang_index)
	assert diags == []
	add, plain = unit.decls
	assert isinstance(add, FunctionDecl)
	assert add.name == "add"
	assert add.param_types == ("int", "int")
	assert add.return_type == "int"
	assert add.annotation == "EM_IMPORT:func:jsAdd"
	assert add.linkage_name
	assert add.span.line == 1
	assert plain.annotation is None
	assert plain.param_types == ()


def test_cpp_record_members_and_namespaces(tmp_path: Path, clang_index) -> None:
	src = _write(
		tmp_path / "shape.cpp",
		"""
namespace js {
struct __attribute__((annotate("EM_IMPORT:record:Shape"))) Shape {
	__attribute__((annotate("EM_IMPORT:constructor"))) Shape(double r);
	__attribute__((annotate("EM_IMPORT:method:area"))) double area() const;
	struct Inner {
		void ping();
	};
};
}
""".lstrip(),
	)
	unit, diags = load_translation_unit(src, ["-xc++", "-std=c++17"], index=clang_index)
	assert diags == []
	(ns,) = unit.decls
	assert isinstance(ns, ScopeDecl)
	(shape,) = ns.decls
	assert isinstance(shape, RecordDecl)
	assert shape.annotation == "EM_IMPORT:record:Shape"
	ctor, area, inner = shape.members
	assert ctor.annotation == "EM_IMPORT:constructor"
	assert ctor.param_types == ("double",)
	assert area.return_type == "double"
	assert area.linkage_name and area.linkage_name != "area"
	assert isinstance(inner, RecordDecl)
	assert inner.annotation is None

	sink = io.StringIO()
	result = collect_imports(unit, DescriptorEmitter(sink))
	assert result.ok
	lines = sink.getvalue().splitlines()
	assert len(lines) == 2
	assert lines[0].startswith('(constructor "Shape" ')
	assert lines[0].endswith(' ("double") "void")')
	assert lines[1].startswith('(method "Shape" ')
	assert lines[1].endswith(' "area" () "double")')


def test_extern_c_block_is_traversed(tmp_path: Path, clang_index) -> None:
	src = _write(
		tmp_path / "ext.cpp",
		"""
extern "C" {
__attribute__((annotate("EM_IMPORT:func:now"))) double now(void);
}
""".lstrip(),
	)
	unit, diags = load_translation_unit(src, ["-xc++"], index=clang_index)
	assert diags == []
	sink = io.StringIO()
	assert collect_imports(unit, DescriptorEmitter(sink)).ok
	# C linkage: the symbol is the plain name, modulo a platform underscore.
	line = sink.getvalue()
	assert line.startswith("(func ")
	assert line.split()[1].lstrip("_") == "now"
	assert line.endswith(' "now" () "double")\n')


def test_header_declarations_skipped_by_default(tmp_path: Path, clang_index) -> None:
	_write(tmp_path / "lib.h", '__attribute__((annotate("EM_IMPORT:func:h"))) void from_header(void);\n')
	src = _write(
		tmp_path / "main.c",
		'#include "lib.h"\n__attribute__((annotate("EM_IMPORT:func:m"))) void from_main(void);\n',
	)
	unit, _ = load_translation_unit(src, [f"-I{tmp_path}"], index=clang_index)
	assert [d.name for d in unit.decls] == ["from_main"]

	unit, _ = load_translation_unit(src, [f"-I{tmp_path}"], index=clang_index, include_headers=True)
	names = [d.name for d in unit.decls]
	assert "from_header" in names and "from_main" in names


def test_parse_errors_become_frontend_diagnostics(tmp_path: Path, clang_index) -> None:
	src = _write(tmp_path / "broken.c", "int f(int a {\n")
	_unit, diags = load_translation_unit(src, [], index=clang_index)
	assert diags
	assert all(d.phase == "frontend" for d in diags)
	assert diags[0].severity in ("error", "fatal")
	assert diags[0].span.file is not None


def test_out_of_line_member_definition_is_not_a_top_level_function(tmp_path: Path, clang_index) -> None:
	src = _write(
		tmp_path / "w.cpp",
		"""
namespace ui {
struct __attribute__((annotate("EM_IMPORT:record:Widget"))) Widget {
	__attribute__((annotate("EM_IMPORT:method:resize"))) void resize(int w);
};
}

void ui::Widget::resize(int w) {}
""".lstrip(),
	)
	unit, diags = load_translation_unit(src, ["-xc++"], index=clang_index)
	assert diags == []
	# Only the namespace survives at top level; the definition is dropped.
	assert [type(d) for d in unit.decls] == [ScopeDecl]
	(widget,) = unit.decls[0].decls
	assert [m.name for m in widget.members] == ["resize"]

	sink = io.StringIO()
	result = collect_imports(unit, DescriptorEmitter(sink))
	assert result.ok
	assert result.emitted == 1
	assert sink.getvalue().count("\n") == 1


def test_header_declaration_with_main_file_definition(tmp_path: Path, clang_index) -> None:
	_write(tmp_path / "api.h", '__attribute__((annotate("EM_IMPORT:func:jsTick"))) int tick(int n);\n')
	src = _write(tmp_path / "api.c", '#include "api.h"\nint tick(int n) { return n; }\n')
	args = [f"-I{tmp_path}"]

	# The definition inherits the header's annotation and is the only main-file decl.
	unit, diags = load_translation_unit(src, args, index=clang_index)
	assert diags == []
	sink = io.StringIO()
	result = collect_imports(unit, DescriptorEmitter(sink))
	assert result.ok
	assert result.emitted == 1
	assert sink.getvalue().endswith(' "jsTick" ("int") "int")\n')

	# With headers included both declarations are visited; nothing deduplicates.
	unit, _ = load_translation_unit(src, args, index=clang_index, include_headers=True)
	sink = io.StringIO()
	result = collect_imports(unit, DescriptorEmitter(sink))
	assert result.ok
	assert result.emitted == 2
	lines = sink.getvalue().splitlines()
	assert len(lines) == 2
	assert lines[0] == lines[1]
