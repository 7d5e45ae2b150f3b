"""FastAPI application, lifespan wiring and pass-through middlewares."""
