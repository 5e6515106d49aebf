"""
Base model for all sample-side records.

Records are read-only snapshots of what the load-testing engine measured.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """
    Base model for engine records.

    Provides:
    - Immutability (a sample never changes while a document is built)
    - camelCase aliases so engine JSON dumps validate directly
    - Population by field name or alias
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        # Engines add fields freely; they are not part of the document
        extra="ignore",
    )
