# ABOUTME: Routes module initialization.
# ABOUTME: Exports all route modules for FastAPI app.

from ukraine_pulse.web.routes import api, coverage, focus, home

__all__ = ["api", "coverage", "focus", "home"]
