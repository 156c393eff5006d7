"""
Mood Tracker Backend — API Routes Package
===========================================

Route Inventory:
    - moods.py:   POST/GET /api/moods, GET /api/moods/stats,
                  GET/PATCH/DELETE /api/moods/{entry_id}
    - errors.py:  POST/GET /api/errors       (frontend error reports)
    - health.py:  GET /health, GET /metrics

Routes stay thin: they pull data out of the request, call a service, and
set status codes and headers. Business rules live in app.services.
"""
