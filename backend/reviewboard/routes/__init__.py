# Routes package init
"""
Review Board Backend — API Routes Package
==========================================

Route Inventory:
    - reviews.py:  GET    /reviews         (list all reviews)
                   POST   /reviews         (create a review)
                   DELETE /delete-review   (delete a review by id)
    - health.py:   GET    /health          (store connectivity check)

Routes stay thin: pull the validated body, call ReviewService, return
the response model. Business rules live in the service.
"""
