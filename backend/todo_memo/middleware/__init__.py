"""
Todo Memo Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request Logging + Request ID] → [CORS] → Route Handler

    The logging middleware is outermost so the logged status and duration
    cover everything below it, including the exception handlers.
"""
