"""
API route modules, one router per resource.

This package contains subrouters for:
- Auth: login, refresh, logout and current user
- Users: admin user management
- Business resources: production units, expenses, revenues, inventory,
  customers, orders, salary payments, maintenance records
- Dashboard aggregates, reports, spreadsheet import and GST utilities

Routers are included from src.api.main (under the /api/v1 prefix).
"""
