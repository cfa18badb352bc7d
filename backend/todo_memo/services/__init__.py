# Services package init
"""
Todo Memo Backend — Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and the document store.
How:   Services receive raw payloads, validate them, apply the ordering rules
       and persist through a TodoStore. Routes get them through FastAPI's
       dependency injection (database.get_todo_service).

Service Inventory:
    - validation:     named schemas (create-todo, update-todo) → ValidationError
    - OrderingEngine: order assignment and swap-on-reorder
    - TodoService:    create / list / update / delete orchestration
    - TodoStore (abstract): persistence contract
    - MongoTodoStore: MongoDB implementation (motor)
    - InMemoryTodoStore: process-local implementation (tests, local runs)
"""
