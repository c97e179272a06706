# Pydantic response models for endpoints with a fixed response shape.
