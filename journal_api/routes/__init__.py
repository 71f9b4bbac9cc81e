# Routes package init
"""
Daily Journal API - Routes Package
====================================

Route Inventory:
    - entries.py: GET    /entry                 (list all entries)
                  GET    /entry/title/{title}   (exact title match)
                  GET    /entry/{id}            (single entry)
                  POST   /entry                 (create)
                  PUT    /entry/{id}            (update title/body)
                  DELETE /entry/{id}            (delete)
    - health.py:  GET    /health                (service health check)

Routes stay thin: read path/body parameters, call the service, return the
result. Status codes for failures come from the global exception handlers.
"""
