# Middleware package init
"""
FoodShelf Backend — Middleware Package
========================================

What:  Cross-cutting request handling shared by every route.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line carries the ID.

Request-level dependencies also live here:
    - blank_fields.food_update_payload: strips "" fields and `owner`
      from PATCH bodies before schema validation
"""
