# Middleware package init
"""
Daily Journal API - Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    The request ID is set before the logging middleware reads it, and is
    written to the response headers on the way out.
"""
