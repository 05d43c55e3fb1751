"""Model namespace for unique-id-core artifact schemas."""

from artifacts.models.call_ids import CallIdRecord

__all__ = ["CallIdRecord"]
