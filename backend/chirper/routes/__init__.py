# Routes package init
"""
Chirper Backend: API Routes Package
===================================

Route Inventory:
    - tweets.py:  POST /api/tweets   (create a tweet, auth required)
    - users.py:   GET  /api/user     (current caller, auth required)
    - health.py:  GET  /health       (service health check)

Routes stay thin: resolve the caller, read the request, call a service,
return a schema. Error responses come from the handlers in main.py.
"""
