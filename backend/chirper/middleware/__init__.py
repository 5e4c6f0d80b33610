# Middleware package init
"""
Chirper Backend: Middleware Package
===================================

Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the logging middleware and every logger below
    it can read the correlation id. The response passes back through the
    chain in reverse, picking up the X-Request-ID header on the way out.
"""
