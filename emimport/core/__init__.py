"""
emimport.core: shared diagnostics/span types used across the frontend,
traversal and driver.

Modules:
  - diagnostics: Diagnostic plus human/JSON renderers
  - span: best-effort source locations
"""

__all__ = [
    "diagnostics",
    "span",
]
