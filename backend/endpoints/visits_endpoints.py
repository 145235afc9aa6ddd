from fastapi import APIRouter, Depends, Query

from ministore import Schema
from deps import get_schema

router = APIRouter()

@router.get("/api/visits")
def get_visits(
    schema: Schema = Depends(get_schema),
    pet_id: int = Query(None),
    paid: int = Query(None),
):
    visits = schema.visits.all()
    if pet_id is not None:
        visits = visits.filter(lambda v: v.pet_id == pet_id)
    if paid is not None:
        visits = visits.filter(lambda v: v.attrs.get("paid") == paid)
    return [v.to_dict() for v in visits]

@router.get("/api/visits/{visit_id}")
def get_visit(visit_id: int, schema: Schema = Depends(get_schema)):
    return schema.visits.find(visit_id).to_dict()
