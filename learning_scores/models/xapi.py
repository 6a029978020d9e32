"""
xAPI statement envelope.

Only `object.id` is read; everything else in a statement is passed through to
the record store untouched and discarded here.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class XAPIObject(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1, description="Activity IRI, last path segment is the context id")


class XAPIStatement(BaseModel):
    model_config = ConfigDict(extra="ignore")

    object: XAPIObject


StatementBatch = TypeAdapter(List[XAPIStatement])
