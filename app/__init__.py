"""
Internship Analytics Service
Role-scoped dashboards over internship placements, evaluations and attendance.

Architecture:
- PostgreSQL: users, companies, internships, evaluations, attendance
- Repository: storage-agnostic read/write interface (SQL or in-memory)
- Dashboard service: ratings, time buckets, rankings, name resolution
"""

__version__ = "1.0.0"
