"""
Database utilities package.

This package contains database-specific utilities:
- Session management helpers
- Seed data for local/dev environments
"""
