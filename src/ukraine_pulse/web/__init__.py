# ABOUTME: Web frontend package for Ukraine Pulse.
# ABOUTME: FastAPI app, routes, templates and rendering helpers.
