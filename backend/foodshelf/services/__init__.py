# Services package init
"""
FoodShelf Backend — Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services accept a session plus validated schemas, apply the rules,
       and return response schemas or raise domain exceptions.

Service Inventory:
    - FoodService: list / get / create / update / delete for foods
    - ownership:   handle_404() and require_ownership() guards
"""
