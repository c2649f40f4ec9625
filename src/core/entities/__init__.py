"""
Business entities representing core domain concepts.

Entities are mutable objects with identity that live for the duration
of a batch run.

Exports:
- SourceFile: A file awaiting processing in the source directory
- DeliveryResult: Outcome of an upload (delivery id + retained files)
- ProgressState: Live upload progress of a single item
"""

from src.core.entities.source_file import DeliveryResult, ProgressState, SourceFile

__all__ = [
    "SourceFile",
    "DeliveryResult",
    "ProgressState",
]
