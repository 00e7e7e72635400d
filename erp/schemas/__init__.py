"""Request/response schemas (pydantic). JSON keys are camelCase; Python attributes snake_case."""
