# Middleware package init
"""
Review Board Backend — Middleware Package
==========================================

Middleware Chain (outermost first):
    Request → [CORS] → [Request ID] → [Logging] → Route Handler

    1. CORS first: OPTIONS is answered before anything else runs, and the
       CORS headers land on every response that comes back through it,
       including 4xx/5xx bodies produced by the exception handlers.
    2. Request ID: Sets the correlation id used by logs and error bodies.
    3. Logging: Records status and duration of the routed request.
"""
