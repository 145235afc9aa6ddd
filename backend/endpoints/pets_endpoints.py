from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ministore import Schema
from deps import as_changes, get_schema

router = APIRouter()

class PetCreate(BaseModel):
    owner_id: int
    name: str
    species: str
    breed: str | None = None
    birth_date: str | None = None

class PetUpdate(BaseModel):
    owner_id: int | None = None
    name: str | None = None
    species: str | None = None
    breed: str | None = None
    birth_date: str | None = None

class VisitCreate(BaseModel):
    date: str
    reason: str
    paid: int = 0

@router.get("/api/pets")
def get_pets(
    schema: Schema = Depends(get_schema),
    owner_id: int = Query(None),
    species: str = Query(None),
):
    query = {}
    if owner_id is not None:
        query["owner_id"] = owner_id
    if species:
        query["species"] = species
    pets = schema.pets.where(query) if query else schema.pets.all()
    return [p.to_dict() for p in pets]

@router.post("/api/pets")
def add_pet(pet: PetCreate, schema: Schema = Depends(get_schema)):
    owner = schema.owners.find_or_none(pet.owner_id)
    if not owner:
        raise HTTPException(status_code=404, detail="Owner not found")
    new_pet = schema.pets.new(pet.model_dump(exclude={"owner_id"}), owner=owner)
    new_pet.save()
    owner.save()
    return new_pet.to_dict()

@router.get("/api/pets/{pet_id}")
def get_pet(pet_id: int, schema: Schema = Depends(get_schema)):
    return schema.pets.find(pet_id).to_dict()

@router.put("/api/pets/{pet_id}")
def update_pet(pet_id: int, pet: PetUpdate, schema: Schema = Depends(get_schema)):
    existing = schema.pets.find(pet_id)
    existing.update(as_changes(pet))
    if existing.owner is not None:
        existing.owner.save()
    return existing.to_dict()

@router.delete("/api/pets/{pet_id}")
def delete_pet(pet_id: int, schema: Schema = Depends(get_schema)):
    schema.pets.find(pet_id).destroy()
    return {"message": "Pet deleted"}

@router.get("/api/pets/{pet_id}/visits")
def get_pet_visits(pet_id: int, schema: Schema = Depends(get_schema)):
    return [v.to_dict() for v in schema.pets.find(pet_id).visits]

@router.post("/api/pets/{pet_id}/visits")
def add_pet_visit(pet_id: int, visit: VisitCreate, schema: Schema = Depends(get_schema)):
    pet = schema.pets.find(pet_id)
    return pet.create_visit(visit.model_dump()).to_dict()
