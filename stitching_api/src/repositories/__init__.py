"""
Repository layer for data access.

Repositories encapsulate the read-filter-rewrite patterns for each workbook
table. Services compose their synchronous primitives inside
`WorkbookSession.run_sync` when several tables must change together.
"""
