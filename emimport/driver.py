# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
em-import driver.

Parses every source with libclang, traverses each declaration tree and writes
one descriptor line per annotated function to a single sink (stdout or `-o`).

Descriptors are collected in memory and only written once every source
succeeded, so a failed run never leaves a partial output file behind.
Diagnostics go to stderr, either as `file:line:column: severity: message` or,
with --json, as one JSON object.
"""

from __future__ import annotations

import argparse
import io
import json
import sys
from pathlib import Path
from typing import TextIO

from emimport.core.diagnostics import Diagnostic, diag_to_json, format_human, has_errors
from emimport.core.span import Span
from emimport.emitter import DescriptorEmitter
from emimport.frontend import (
	CompileArgsProvider,
	FrontendError,
	configure_libclang,
	create_index,
	load_compilation_database,
	load_translation_unit,
)
from emimport.name_resolver import NameResolutionError
from emimport.options import EmImportOptions
from emimport.traversal import collect_imports


def _build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(
		prog="em-import",
		description="Emit import descriptors for functions annotated with EM_IMPORT:<kind>[:<payload>]",
		epilog="Arguments after `--` are passed to clang for every source (overrides -p).",
	)
	p.add_argument("sources", type=Path, nargs="+", help="C/C++ source file(s)")
	p.add_argument("-o", "--output", type=Path, default=None, help="Output file (default: stdout)")
	p.add_argument(
		"-p",
		"--build-path",
		type=Path,
		default=None,
		help="Directory containing compile_commands.json",
	)
	p.add_argument(
		"--extra-arg",
		dest="extra_args",
		action="append",
		default=[],
		help="Additional argument to append to the compiler command line (repeatable)",
	)
	p.add_argument(
		"--extra-arg-before",
		dest="extra_args_before",
		action="append",
		default=[],
		help="Additional argument to prepend to the compiler command line (repeatable)",
	)
	p.add_argument("--libclang", type=Path, default=None, help="Path to the libclang shared library")
	p.add_argument(
		"--include-headers",
		action="store_true",
		help="Also emit imports declared in included headers (default: main file only)",
	)
	p.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON on stderr (phase/message/severity/code/file/line/column)",
	)
	return p


_COMPILER_FLAG_OPTIONS = ("--extra-arg", "--extra-arg-before")


def _join_flag_values(argv: list[str]) -> list[str]:
	"""
	Rewrite `--extra-arg -DX` as `--extra-arg=-DX`.

	argparse refuses option values that look like options, and every useful
	value of these options is a compiler flag.
	"""
	out: list[str] = []
	i = 0
	while i < len(argv):
		arg = argv[i]
		if arg in _COMPILER_FLAG_OPTIONS and i + 1 < len(argv):
			out.append(f"{arg}={argv[i + 1]}")
			i += 2
			continue
		out.append(arg)
		i += 1
	return out


def parse_options(argv: list[str] | None = None) -> EmImportOptions:
	argv = list(sys.argv[1:] if argv is None else argv)
	fixed_args: tuple[str, ...] | None = None
	if "--" in argv:
		split = argv.index("--")
		fixed_args = tuple(argv[split + 1 :])
		argv = argv[:split]
	args = _build_parser().parse_args(_join_flag_values(argv))
	return EmImportOptions(
		sources=tuple(args.sources),
		output_path=args.output,
		build_path=args.build_path,
		extra_args_before=tuple(args.extra_args_before),
		extra_args=tuple(args.extra_args),
		fixed_args=fixed_args,
		libclang=args.libclang,
		include_headers=bool(args.include_headers),
		json=bool(args.json),
	)


def _args_provider(opts: EmImportOptions) -> CompileArgsProvider:
	database = None
	if opts.fixed_args is None and opts.build_path is not None:
		database = load_compilation_database(opts.build_path)
	return CompileArgsProvider(
		database=database,
		fixed_args=opts.fixed_args,
		extra_args_before=opts.extra_args_before,
		extra_args=opts.extra_args,
	)


def _collect(opts: EmImportOptions, sink: TextIO) -> list[Diagnostic]:
	"""Run every source into `sink`; stop at the first source that fails."""
	diagnostics: list[Diagnostic] = []
	configure_libclang(opts.libclang)
	index = create_index()
	provider = _args_provider(opts)
	emitter = DescriptorEmitter(sink)
	for source in opts.sources:
		unit, frontend_diags = load_translation_unit(
			source,
			provider.args_for(source),
			index=index,
			include_headers=opts.include_headers,
		)
		diagnostics.extend(frontend_diags)
		if has_errors(frontend_diags):
			break
		result = collect_imports(unit, emitter)
		diagnostics.extend(result.diagnostics)
		if not result.ok:
			break
	return diagnostics


def _write_output(opts: EmImportOptions, text: str, stdout: TextIO) -> list[Diagnostic]:
	if opts.output_path is None:
		stdout.write(text)
		stdout.flush()
		return []
	try:
		opts.output_path.write_text(text, encoding="utf-8")
	except OSError as err:
		return [
			Diagnostic(
				message=f"cannot write output: {err}",
				phase="output",
				span=Span(file=str(opts.output_path)),
			)
		]
	return []


def _report(diagnostics: list[Diagnostic], exit_code: int, opts: EmImportOptions, stderr: TextIO) -> None:
	default_file = str(opts.sources[0]) if opts.sources else None
	if opts.json:
		payload = {
			"exit_code": exit_code,
			"diagnostics": [diag_to_json(d, default_file=default_file) for d in diagnostics],
		}
		print(json.dumps(payload), file=stderr)
		return
	for diag in diagnostics:
		print(format_human(diag, default_file=default_file), file=stderr)
		for note in diag.notes:
			print(f"  note: {note}", file=stderr)


def run_em_import(opts: EmImportOptions, *, stdout: TextIO | None = None, stderr: TextIO | None = None) -> int:
	stdout = stdout if stdout is not None else sys.stdout
	stderr = stderr if stderr is not None else sys.stderr
	buffer = io.StringIO()
	try:
		diagnostics = _collect(opts, buffer)
	except FrontendError as err:
		diagnostics = [Diagnostic(message=str(err), phase="frontend", span=err.span)]
	except NameResolutionError as err:
		diagnostics = [Diagnostic(message=str(err), phase="resolve", span=err.span)]

	if not has_errors(diagnostics):
		diagnostics.extend(_write_output(opts, buffer.getvalue(), stdout))
	exit_code = 1 if has_errors(diagnostics) else 0
	if diagnostics or opts.json:
		_report(diagnostics, exit_code, opts, stderr)
	return exit_code


def main(argv: list[str] | None = None) -> int:
	"""
	CLI entry: `em-import [options] SOURCE... [-- CLANG_ARGS...]`.

	Exit codes: 0 success, 1 error diagnostics, 2 usage errors (argparse).
	"""
	return run_em_import(parse_options(argv))


__all__ = ["main", "parse_options", "run_em_import"]
