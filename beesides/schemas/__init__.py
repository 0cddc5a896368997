"""Request Schemas — pydantic models validated before any domain operation runs."""
