"""
libclang-backed frontend: source -> `emimport.decls` tree, plus per-source
compiler arguments from a compilation database.
"""

from .clang_frontend import FrontendError, configure_libclang, create_index, load_translation_unit
from .compile_db import CompileArgsProvider, load_compilation_database, strip_compile_command

__all__ = [
	"CompileArgsProvider",
	"FrontendError",
	"configure_libclang",
	"create_index",
	"load_compilation_database",
	"load_translation_unit",
	"strip_compile_command",
]
