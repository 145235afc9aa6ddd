from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from ministore import Schema
from deps import as_changes, get_schema

router = APIRouter()

class OwnerRegister(BaseModel):
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None

class OwnerUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    pet_ids: list[int] | None = None

class OwnerPetCreate(BaseModel):
    name: str
    species: str
    breed: str | None = None
    birth_date: str | None = None

class OwnerPetIds(BaseModel):
    pet_ids: list[int] | None

def _apply_owner_filters(owners, first_name, last_name, email):
    if first_name:
        owners = owners.filter(lambda o: first_name.lower() in (o.attrs.get("first_name") or "").lower())
    if last_name:
        owners = owners.filter(lambda o: last_name.lower() in (o.attrs.get("last_name") or "").lower())
    if email:
        owners = owners.filter(lambda o: email.lower() in (o.attrs.get("email") or "").lower())
    return owners

@router.post("/api/owners")
def register_owner(owner: OwnerRegister, schema: Schema = Depends(get_schema)):
    new_owner = schema.owners.create(owner.model_dump())
    return new_owner.to_dict()

@router.get("/api/owners")
def get_owners(
    schema: Schema = Depends(get_schema),
    first_name: str = Query(None),
    last_name: str = Query(None),
    email: str = Query(None),
):
    owners = _apply_owner_filters(schema.owners.all(), first_name, last_name, email)
    return [o.to_dict() for o in owners]

@router.get("/api/owners/{owner_id}")
def get_owner(owner_id: int, schema: Schema = Depends(get_schema)):
    return schema.owners.find(owner_id).to_dict()

@router.put("/api/owners/{owner_id}")
def update_owner(owner_id: int, owner: OwnerUpdate, schema: Schema = Depends(get_schema)):
    existing = schema.owners.find(owner_id)
    existing.update(as_changes(owner))
    return existing.to_dict()

@router.delete("/api/owners/{owner_id}")
def delete_owner(owner_id: int, schema: Schema = Depends(get_schema)):
    schema.owners.find(owner_id).destroy()
    return {"message": "Owner deleted"}

@router.get("/api/owners/{owner_id}/pets")
def get_owner_pets(owner_id: int, schema: Schema = Depends(get_schema)):
    owner = schema.owners.find(owner_id)
    return [p.to_dict() for p in owner.pets]

@router.post("/api/owners/{owner_id}/pets")
def add_owner_pet(owner_id: int, pet: OwnerPetCreate, schema: Schema = Depends(get_schema)):
    owner = schema.owners.find(owner_id)
    new_pet = owner.create_pet(pet.model_dump())
    return new_pet.to_dict()

@router.put("/api/owners/{owner_id}/pet_ids")
def set_owner_pets(owner_id: int, body: OwnerPetIds, schema: Schema = Depends(get_schema)):
    owner = schema.owners.find(owner_id)
    owner.pet_ids = body.pet_ids
    owner.save()
    return owner.to_dict()
