import copy
import logging
from itertools import count

from ministore.errors import RecordNotFound

logger = logging.getLogger("ministore")


def _is_id_list(value):
    return isinstance(value, (list, tuple))


class DbCollection:
    """A named table of rows held in memory.

    Rows go in and come out as deep copies, so callers never share
    state with what is stored.
    """

    def __init__(self, name, initial_data=None):
        self.name = name
        self._records = {}
        self._ids = count(1)
        if initial_data:
            self.insert(initial_data)

    def __repr__(self):
        return f"<DbCollection {self.name} rows={len(self._records)}>"

    def __len__(self):
        return len(self._records)

    def _log(self, action, detail):
        logger.debug(f"[DB {action}]: {self.name} | {detail}")

    def _next_id(self):
        new_id = next(self._ids)
        while new_id in self._records:
            new_id = next(self._ids)
        return new_id

    def _insert_one(self, data):
        row = copy.deepcopy(dict(data))
        if row.get("id") is None:
            row["id"] = self._next_id()
        self._records[row["id"]] = row
        self._log("INSERT", row)
        return copy.deepcopy(row)

    def insert(self, data):
        if _is_id_list(data):
            return [self._insert_one(item) for item in data]
        return self._insert_one(data)

    def all(self):
        return [copy.deepcopy(row) for row in self._records.values()]

    def find(self, ids):
        if _is_id_list(ids):
            missing = [i for i in ids if i not in self._records]
            if missing:
                raise RecordNotFound(self.name, missing)
            return [copy.deepcopy(self._records[i]) for i in ids]

        if ids not in self._records:
            raise RecordNotFound(self.name, ids)
        return copy.deepcopy(self._records[ids])

    def where(self, query):
        if callable(query):
            matches = query
        else:
            def matches(row):
                return all(row.get(key) == value for key, value in query.items())
        return [copy.deepcopy(row) for row in self._records.values() if matches(row)]

    def first_or_none(self, query=None):
        rows = self.where(query) if query else self.all()
        return rows[0] if rows else None

    def update(self, target=None, attrs=None):
        if isinstance(target, dict) and attrs is None:
            target, attrs = None, target
        attrs = attrs or {}

        if target is None:
            keys = list(self._records)
        elif _is_id_list(target):
            keys = list(target)
        else:
            keys = [target]

        missing = [k for k in keys if k not in self._records]
        if missing:
            raise RecordNotFound(self.name, missing)

        updated = []
        for key in keys:
            row = self._records[key]
            row.update(copy.deepcopy({k: v for k, v in attrs.items() if k != "id"}))
            self._log("UPDATE", row)
            updated.append(copy.deepcopy(row))

        if target is not None and not _is_id_list(target):
            return updated[0]
        return updated

    def remove(self, target=None):
        if target is None:
            keys = list(self._records)
        elif isinstance(target, dict):
            keys = [row["id"] for row in self.where(target)]
        elif _is_id_list(target):
            keys = list(target)
        else:
            keys = [target]

        for key in keys:
            if self._records.pop(key, None) is not None:
                self._log("DELETE", f"id={key}")

    def reset(self):
        self._records.clear()
        self._ids = count(1)


class Database:
    def __init__(self, initial_data=None):
        self._collections = {}
        if initial_data:
            self.load_data(initial_data)

    def __repr__(self):
        return f"<Database collections={self.collection_names}>"

    def __getitem__(self, name):
        return self._collections[name]

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._collections[name]
        except KeyError:
            raise AttributeError(f"Database has no collection '{name}'") from None

    def __contains__(self, name):
        return name in self._collections

    @property
    def collection_names(self):
        return list(self._collections)

    def create_collection(self, name, initial_data=None):
        if name not in self._collections:
            self._collections[name] = DbCollection(name)
            logger.debug(f"[DB CREATE]: {name}")
        if initial_data:
            self._collections[name].insert(initial_data)
        return self._collections[name]

    def load_data(self, data):
        for name, rows in data.items():
            self.create_collection(name, rows)

    def empty_data(self):
        for collection in self._collections.values():
            collection.reset()
