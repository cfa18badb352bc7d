"""
Todo Memo Backend — API Routes Package
========================================

Route Inventory:
    - todos.py:   GET    /api, /api/          (greeting)
                  POST   /api/todos           (create)
                  GET    /api/todos           (list, order desc)
                  PATCH  /api/todos/{id}      (reorder / toggle done / edit)
                  DELETE /api/todos/{id}      (delete)
    - health.py:  GET    /health              (service health check)

Routes stay thin: they pull the body and path parameters, call TodoService
and shape the response. Business logic lives in services/.
"""
