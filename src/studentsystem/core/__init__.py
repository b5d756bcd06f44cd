"""Core functionality for the student system.

Modules:
- seed_loader: Idempotent insertion of the sample data
- queries: Read-only aggregate queries
- report: Text formatting of the query results
"""
