"""
Catalog exceptions.

Raised by the genre handlers and turned into error pages by the exception
handlers registered in catalog.main.
"""


class GenreNotFoundError(Exception):
    """No genre exists for the requested id, or the id is not a genre id."""

    def __init__(self, genre_id: object) -> None:
        self.genre_id = genre_id
        super().__init__(f"Genre with id {genre_id} not found")
