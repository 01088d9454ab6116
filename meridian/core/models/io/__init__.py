"""
API I/O models.

Pydantic request/response schemas, one module per resource. Read models are
built from database entities with ``model_validate`` (``from_attributes``);
create/update models use enum types on input and dump plain strings.
"""
