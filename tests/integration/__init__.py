"""Integration tests exercising the FastAPI app through its HTTP surface."""
