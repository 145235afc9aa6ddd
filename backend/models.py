from ministore import BelongsTo, HasMany, Model


class Owner(Model):
    pets = HasMany()


class Pet(Model):
    owner = BelongsTo()
    visits = HasMany()


class Visit(Model):
    pet = BelongsTo()


MODELS = (Owner, Pet, Visit)

SEED_DATA = {
    "owners": [
        {"first_name": "Anna", "last_name": "Nowak", "email": "anna@example.com", "pet_ids": [1, 2]},
    ],
    "pets": [
        {"name": "Burek", "species": "dog", "breed": "Labrador", "owner_id": 1, "visit_ids": [1]},
        {"name": "Filemon", "species": "cat", "breed": None, "owner_id": 1, "visit_ids": []},
    ],
    "visits": [
        {"date": "2024-05-01", "reason": "checkup", "paid": 1, "pet_id": 1},
    ],
}
