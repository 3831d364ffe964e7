"""
Schemas module - Response schemas for the dashboard endpoints.

Difference from models:
- Models: repository snapshots (users, internships, evaluations...)
- Schemas: API contract (camelCase payloads the dashboards read)
"""
