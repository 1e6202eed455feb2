"""
Core Package.

Contains the fold logic:
- Declaration model (function and trait-method shapes, parsed with LibCST)
- AsyncAwaitRemover transformer
- Literal substitution fallback
- Fold Engine (dispatch and diagnostics)
- Trace logger
"""
