"""Explicit outcome values for the non-error branches of the pipeline."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NotMyRoute:
    """The request path is outside this service; hand it to the next handler."""

    path: str


@dataclass(frozen=True)
class AssetFailure:
    """Loading or transforming a real asset failed; a placeholder is rendered instead."""

    file_reference_id: int
    reason: str
