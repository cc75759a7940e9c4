"""
Services Layer

Persistence logic that:
- Accepts domain inputs (sessions, ids, field values)
- Returns models or raises ApiError
- Does NOT depend on HTTP request/response objects
"""
