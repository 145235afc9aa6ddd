import logging

from ministore.collection import Collection
from ministore.database import Database
from ministore.errors import InvalidArgument
from ministore.states import ObjectState

logger = logging.getLogger("ministore")


class ModelClassProxy:
    """Lookup and factory handle for one registered model type."""

    def __init__(self, schema, model_class):
        self.schema = schema
        self.model_class = model_class
        self.model_name = model_class._mapper.model_name
        self.collection_name = model_class._mapper.collection_name

    def __repr__(self):
        return f"<ModelClassProxy {self.collection_name}>"

    @property
    def table(self):
        return self.schema.db[self.collection_name]

    def _hydrate(self, row):
        record = self.model_class(self.schema, **row)
        object.__setattr__(record, '_orm_state', ObjectState.PERSISTENT)
        return record

    def new(self, attrs=None, **kwargs):
        return self.model_class(self.schema, **dict(attrs or {}, **kwargs))

    def create(self, attrs=None, **kwargs):
        return self.new(attrs, **kwargs).save()

    def all(self):
        return Collection(self.model_name, [self._hydrate(row) for row in self.table.all()])

    def find(self, ids):
        if isinstance(ids, (list, tuple)):
            rows = self.table.find(list(ids))
            return Collection(self.model_name, [self._hydrate(row) for row in rows])
        return self._hydrate(self.table.find(ids))

    def find_or_none(self, record_id):
        rows = self.table.where({"id": record_id})
        return self._hydrate(rows[0]) if rows else None

    def where(self, query):
        return Collection(self.model_name, [self._hydrate(row) for row in self.table.where(query)])

    def first(self):
        row = self.table.first_or_none()
        return self._hydrate(row) if row is not None else None


class Schema:
    """Registry of model classes bound to one in-memory database.

    Each registered class is reachable by its collection name, either as
    ``schema["posts"]`` or ``schema.posts``.
    """

    def __init__(self, db=None, models=()):
        self.db = db if db is not None else Database()
        self._models = {}
        self._proxies = {}
        self.register_models(*models)

    def __repr__(self):
        return f"<Schema models={list(self._models)}>"

    def register_model(self, model_class):
        mapper = model_class._mapper
        self._models[mapper.model_name] = model_class
        self._proxies[mapper.collection_name] = ModelClassProxy(self, model_class)
        self.db.create_collection(mapper.collection_name)
        logger.debug(f"Registered {mapper!r}")
        return model_class

    def register_models(self, *model_classes):
        for model_class in model_classes:
            self.register_model(model_class)

    def model_for(self, model_name):
        if model_name not in self._models:
            raise InvalidArgument(f"Model '{model_name}' is not registered with {self!r}")
        return self._models[model_name]

    def proxy_for(self, model_name):
        return self._proxies[self.model_for(model_name)._mapper.collection_name]

    def __getitem__(self, collection_name):
        return self._proxies[collection_name]

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._proxies[name]
        except KeyError:
            raise AttributeError(f"Schema has no collection '{name}'") from None

    def clear(self):
        self.db.empty_data()

    def load_fixtures(self, data):
        self.db.load_data(data)
