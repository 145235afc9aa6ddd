from fastapi import Request
from pydantic import BaseModel

from ministore import UNSET, Schema


def get_schema(request: Request) -> Schema:
    return request.app.state.schema


def as_changes(body: BaseModel):
    """Fields the client did not send come through as UNSET."""
    return {
        name: getattr(body, name) if name in body.model_fields_set else UNSET
        for name in type(body).model_fields
    }
