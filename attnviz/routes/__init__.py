"""
AttnViz Backend: API Routes Package
======================================

Route Inventory:
    - texts.py:      GET/POST /api/texts, GET/PUT/DELETE /api/texts/{id}
    - visualize.py:  POST /api/visualize
    - health.py:     GET /health

Routes stay thin: decode the request, call the injected service, return
the result. Status codes for failures come from the handlers in main.py.
"""
