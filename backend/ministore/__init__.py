# ministore - an in-memory record store with has-many / belongs-to associations
from ministore.associations import UNSET
from ministore.base import Model
from ministore.belongs_to import BelongsTo
from ministore.collection import Collection
from ministore.database import Database, DbCollection
from ministore.errors import InvalidArgument, MiniStoreError, RecordNotFound
from ministore.has_many import HasMany
from ministore.schema import Schema

__version__ = "0.1.0"
__all__ = [
    "Model", "HasMany", "BelongsTo", "Collection", "Schema", "Database", "DbCollection",
    "MiniStoreError", "InvalidArgument", "RecordNotFound", "UNSET",
]
