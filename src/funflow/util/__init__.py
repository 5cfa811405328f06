"""
Utility modules shared by the funflow packages.

- Type-based dispatch used by the AST visitors and translators (typedispatch.py)
- Console output with phase timing (application/)
- DOT output and human-readable formatting (io/)
"""
