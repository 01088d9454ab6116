"""
Service layer.

One service per resource wraps the repositories and owns the business rules
(stage history, resolved_at stamping, incremental meeting links, schedule
upserts). Services raise the domain errors from ``errors``.
"""
