# Middleware package init
"""
LessonHub Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: Generate the correlation ID used by every log line
    2. Logging: Log method, path, status, and duration with that ID
    3. GZip / CORS: Standard Starlette middleware configured in main.py
"""
