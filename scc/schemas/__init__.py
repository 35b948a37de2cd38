from .base import BaseSchema, ImportResult, ImportErrorItem

__all__ = ["BaseSchema", "ImportResult", "ImportErrorItem"]
