"""
Local Library Catalog Package

Server-rendered catalog pages for a local library, starting with book genres.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, session factory and declarative base
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection aliases
- templating.py: Jinja2 templates
- exceptions.py: Catalog exceptions
- models/: SQLAlchemy ORM models
- schemas/: Pydantic form and view schemas
- routers/: Page handlers
- services/: Data access, caching, rate limiting
"""

__version__ = "0.1.0"
