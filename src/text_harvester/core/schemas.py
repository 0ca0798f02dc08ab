"""Pydantic response schemas for the scrape boundary contract.

Exactly one of these models is produced per request by
:func:`text_harvester.pipeline.run_pipeline`.  Field names are snake_case in
Python and camelCase on the wire; serialise with
``model_dump(by_alias=True)``.
"""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class AvailableModes(BaseModel):
    """Human-readable descriptions of the modes offered for a large file."""

    sample: str
    batch: str


class ModeChoiceResponse(BaseModel):
    """Informational response for resources above the large-file threshold.

    Not a failure: the caller is expected to repeat the request with
    ``mode=sample`` or ``mode=batch``.

    Attributes:
        file_size_bytes: Probed size of the remote resource.
        file_size_mb: Probed size in megabytes, rounded to one decimal.
        available_modes: Descriptions of the selectable modes.
        batch_count: Number of batch windows needed to cover the file.
    """

    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    is_large_file: Literal[True] = Field(default=True, alias="isLargeFile")
    file_size_bytes: int = Field(alias="fileSizeBytes")
    file_size_mb: float = Field(alias="fileSizeMB")
    available_modes: AvailableModes = Field(alias="availableModes")
    batch_count: int = Field(alias="batchCount")


class HarvestSuccessResponse(BaseModel):
    """Extracted text plus bookkeeping for a successful request."""

    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    text: str
    word_count: int = Field(alias="wordCount")
    url: str
    mode: str
    batch_index: int = Field(alias="batchIndex")
    truncated: bool


class HarvestFailureResponse(BaseModel):
    """Terminal failure; ``error`` is a human-readable message.

    ``error_type`` names the exception class behind the failure.  It is used
    by the request shell to pick an HTTP status and is never serialised.
    """

    success: Literal[False] = False
    error: str
    error_type: str | None = Field(default=None, exclude=True)


HarvestResponse = Union[ModeChoiceResponse, HarvestSuccessResponse, HarvestFailureResponse]
