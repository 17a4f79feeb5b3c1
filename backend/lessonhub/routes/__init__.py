# Routes package init
"""
LessonHub Backend — API Routes Package
========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - health.py:   GET  /                   (plain-text greeting)
                   GET  /health             (store connectivity probe)
    - lessons.py:  GET  /lessons            (all lessons)
                   PUT  /lessons/{id}       (partial update by numeric id)
    - orders.py:   POST /order              (store an order verbatim)
    - search.py:   GET  /search?term=...    (numeric or text search)
    - images.py:   GET  /images/{path}      (static image files)

Routes stay thin: extract parameters, call the service, serialize the
result. Errors are raised as application exceptions and rendered by the
global handlers in main.py.
"""
