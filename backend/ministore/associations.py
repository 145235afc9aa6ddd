from abc import ABC, abstractmethod

from ministore.errors import InvalidArgument


class _Unset:
    """Marker for "no value given", kept distinct from ``None`` (which clears)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "UNSET"

    def __bool__(self):
        return False


UNSET = _Unset()

_IMPLICIT = object()


class Association(ABC):
    """Declarative link from an owner model class to a related model type.

    One instance exists per (owner class, key) and is shared by every
    record of that class; per-record state lives on the record itself.
    """

    def __init__(self, model_name=None, inverse=_IMPLICIT):
        self.model_name = model_name
        self.owner_model_name = None
        self.key = None
        self.foreign_key = None
        self._inverse_key = inverse

    def __repr__(self):
        return (
            f"<{self.__class__.__name__} {self.owner_model_name}.{self.key} "
            f"-> {self.model_name}>"
        )

    @abstractmethod
    def add_methods_to_model_class(self, model_class, key):
        pass

    @abstractmethod
    def points_at(self, record, owner):
        """True when the stored foreign key on record references owner."""

    def related_class(self):
        from ministore.base import Model
        return Model._registry.get(self.model_name)

    def related_model(self, record):
        return record.schema.proxy_for(self.model_name)

    def inverse(self):
        if self._inverse_key is None:
            return None

        related = self.related_class()
        if related is None:
            return None
        candidates = related._mapper.associations

        if self._inverse_key is not _IMPLICIT:
            if self._inverse_key not in candidates:
                raise InvalidArgument(
                    f"{self.owner_model_name}.{self.key} declares inverse "
                    f"'{self._inverse_key}' but {self.model_name} has no such association"
                )
            return candidates[self._inverse_key]

        matches = [
            a for a in candidates.values()
            if a is not self
            and a.model_name == self.owner_model_name
            and a._inverse_key in (_IMPLICIT, self.key)
        ]
        return matches[0] if len(matches) == 1 else None
