"""FastAPI application, lifespan wiring and middleware."""
