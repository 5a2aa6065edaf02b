# Routes package init
"""
FoodShelf Backend — API Routes Package
========================================

Route Inventory:
    - foods.py:   GET/POST /foods, GET/PATCH/DELETE /foods/{id}
    - health.py:  GET /health

Routes stay THIN: extract input, call the service, choose the status code.
"""
