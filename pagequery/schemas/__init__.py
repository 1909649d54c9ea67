"""API Schemas — Pydantic request/response models, serialized in camelCase."""
