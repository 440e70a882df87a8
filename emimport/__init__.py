# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
em-import: extracts EM_IMPORT annotations from C/C++ declarations and emits
one import descriptor line per annotated function.

The core (annotation parsing, traversal, emission) works on `emimport.decls`
trees and has no libclang dependency. The CLI entrypoint is
`emimport.driver:main`.
"""

__all__ = []
