"""AI-powered web search front end backed by a JigsawStack proxy route."""

__version__ = "0.1.0"
