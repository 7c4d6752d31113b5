# Services package init
"""
Review Board Backend — Services Layer
======================================

Service Inventory:
    - IdAllocator:   Monotonic id counter seeded from the store
    - ReviewService: Validation, id assignment and the shared lock around
                     every ReviewStore call
"""
