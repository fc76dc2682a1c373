"""
Pydantic Schemas Package

This package contains Pydantic models for form validation and for the
data handed to templates.

WHY Separate Schemas from SQLAlchemy Models?
============================================
1. Validation: Different rules for create vs update forms
2. Sanitization: Submitted text is cleaned before it reaches the database
3. Decoupling: Cached views don't depend on live ORM rows

Schema Naming Convention:
- XxxCreateForm / XxxUpdateForm: Fields submitted by a form
- XxxResponse: Fields handed to templates and the cache
"""

from catalog.schemas.genre import (
    GenreCreateForm,
    GenreDeleteForm,
    GenreResponse,
    GenreUpdateForm,
    form_errors,
    sanitize,
)

__all__ = [
    "GenreCreateForm",
    "GenreUpdateForm",
    "GenreDeleteForm",
    "GenreResponse",
    "form_errors",
    "sanitize",
]
