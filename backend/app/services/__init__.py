"""
Mood Tracker Backend — Services Layer
=======================================

Business logic between the routes (HTTP) and the database.

Service Inventory:
    - MoodService:      Mood entry CRUD and statistics
    - ErrorTracker:     Client error reports forwarded by the frontend
    - MetricsRegistry:  In-process request counters for /metrics
"""
