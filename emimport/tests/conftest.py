# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import pytest


@pytest.fixture(scope="session")
def clang_index():
	"""
	A libclang Index, or skip when the shared library cannot be loaded.

	Frontend and CLI tests parse real sources; the core tests never need this.
	"""
	cindex = pytest.importorskip("clang.cindex")
	try:
		return cindex.Index.create()
	except cindex.LibclangError as err:
		pytest.skip(f"libclang unavailable: {err}")
