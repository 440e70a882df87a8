# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class EmImportOptions:
	"""
	Everything one em-import run needs, built once from argv.

	`fixed_args` (arguments after `--`) overrides the compilation database
	found under `build_path`.
	"""

	sources: tuple[Path, ...]
	output_path: Path | None = None
	build_path: Path | None = None
	extra_args_before: tuple[str, ...] = ()
	extra_args: tuple[str, ...] = ()
	fixed_args: tuple[str, ...] | None = None
	libclang: Path | None = None
	include_headers: bool = False
	json: bool = False


__all__ = ["EmImportOptions"]
