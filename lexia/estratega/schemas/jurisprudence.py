# lexia/estratega/schemas/jurisprudence.py
"""Schema for jurisprudence stage output.

Entries are model-generated illustrative precedents, not retrieved rulings.
"""

from pydantic import Field

from .common import CamelModel


class Jurisprudence(CamelModel):
    title: str
    court: str
    date: str = Field(..., description="Free text, not validated as a calendar date")
    summary: str
    relevance: str
    key_arguments: list[str] = Field(..., min_length=1, max_length=5)
    url: str | None = None
    indemnization_amount: str | None = None


class JurisprudenceResults(CamelModel):
    results: list[Jurisprudence] = Field(..., min_length=2, max_length=5)
