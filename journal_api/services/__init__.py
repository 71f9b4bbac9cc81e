# Services package init
"""
Daily Journal API - Services Layer
====================================

Service Inventory:
    - EntryService: list / find-by-title / get / create / update / delete

Services take the request's database session as an argument and know nothing
about HTTP, so they can be tested with a mocked session.
"""
