# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Per-source compiler arguments.

Arguments come from (in priority order) a fixed argument list given after
`--` on the command line, or a `compile_commands.json` found in the build
path. `extra_args_before` / `extra_args` wrap whatever was chosen.

Compile commands are recorded for full compilations, so the parts that make
no sense for a syntax-only parse are stripped: the compiler itself, the
source file, `-c`, the output file and dependency-file options.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Sequence

from clang import cindex

from emimport.frontend.clang_frontend import FrontendError

# Flags dropped on their own.
_DROP_FLAGS = frozenset({"-c", "-MD", "-MMD", "-MP"})
# Flags dropped together with their value (`-o out.o` or `-oout.o`).
_DROP_WITH_VALUE = ("-o", "-MF", "-MT", "-MQ")


def load_compilation_database(build_path: Path) -> cindex.CompilationDatabase:
	try:
		return cindex.CompilationDatabase.fromDirectory(str(build_path))
	except cindex.CompilationDatabaseError as err:
		raise FrontendError(
			f"could not load compilation database from {build_path}: {err}",
			path=build_path / "compile_commands.json",
		) from err


def _same_file(arg: str, directory: str, source: Path) -> bool:
	candidate = Path(arg)
	if not candidate.is_absolute():
		candidate = Path(directory) / candidate
	return candidate.resolve() == source.resolve()


def strip_compile_command(arguments: Sequence[str], directory: str, source: Path) -> list[str]:
	"""Reduce a recorded compile command to the flags a syntax-only parse needs."""
	out: list[str] = []
	args = list(arguments)[1:]  # compiler executable
	i = 0
	while i < len(args):
		arg = args[i]
		if arg in _DROP_FLAGS:
			i += 1
			continue
		if arg in _DROP_WITH_VALUE:
			i += 2
			continue
		if arg.startswith(_DROP_WITH_VALUE):
			i += 1
			continue
		if not arg.startswith("-") and _same_file(arg, directory, source):
			i += 1
			continue
		out.append(arg)
		i += 1
	if directory:
		# Relative -I paths in the database are relative to the command's directory.
		out = ["-working-directory", directory, *out]
	return out


def _first_command(commands: Iterable[Any] | None) -> Any | None:
	if commands is None:
		return None
	for cmd in commands:
		return cmd
	return None


@dataclass(frozen=True)
class CompileArgsProvider:
	database: Any = None  # cindex.CompilationDatabase
	fixed_args: tuple[str, ...] | None = None
	extra_args_before: tuple[str, ...] = ()
	extra_args: tuple[str, ...] = ()

	def args_for(self, source: Path) -> list[str]:
		if self.fixed_args is not None:
			base = list(self.fixed_args)
		elif self.database is not None:
			base = self._database_args(source)
		else:
			base = []
		return [*self.extra_args_before, *base, *self.extra_args]

	def _database_args(self, source: Path) -> list[str]:
		try:
			commands = self.database.getCompileCommands(str(source.resolve()))
		except cindex.CompilationDatabaseError:
			return []
		cmd = _first_command(commands)
		if cmd is None:
			return []
		return strip_compile_command(list(cmd.arguments), cmd.directory, source)


__all__ = ["CompileArgsProvider", "load_compilation_database", "strip_compile_command"]
