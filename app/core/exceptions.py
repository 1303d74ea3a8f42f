# app/core/exceptions.py
"""Domain exceptions raised by the service layer."""
from typing import Any


class NotFoundError(Exception):
    """
    Raised when an operation target or a referenced foreign-key id
    does not exist in the store.
    """

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found with id: {entity_id}")
