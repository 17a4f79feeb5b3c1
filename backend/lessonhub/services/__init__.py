# Services package init
"""
LessonHub Backend — Services Layer
====================================

What:  The MongoDB calls behind each route, kept out of the HTTP layer.

Service Inventory:
    - LessonService: list all lessons, partial update by numeric id
    - OrderService:  insert an order document verbatim
    - SearchService: numeric-vs-text search query construction and execution
    - ImageService:  resolve /images paths inside IMAGES_DIR

Services are stateless singletons; the database handle is passed in on
each call by the route, which receives it from FastAPI's Depends().
"""
