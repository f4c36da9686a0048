"""Transcript-related data models."""
from typing import Iterable
from pydantic import BaseModel, ConfigDict, Field


class Transcript(BaseModel):
    """Caption text for a video, flattened without timing information."""
    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(..., description="Caption fragments joined with single spaces")
    word_count: int = Field(..., alias="wordCount", description="Total word count in transcript")

    @classmethod
    def from_fragments(cls, fragments: Iterable[str]) -> "Transcript":
        """Join ordered caption fragments into a single transcript."""
        text = " ".join(fragments)
        return cls(text=text, word_count=len(text.split()))
