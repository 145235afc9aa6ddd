import logging

from ministore.associations import Association, UNSET
from ministore.errors import MiniStoreError, check
from ministore.has_many import HasMany
from ministore.mapper import Mapper
from ministore.states import ObjectState

logger = logging.getLogger("ministore")


class Model:
    """Base class for records.

    Subclasses declare associations in the class body::

        class Post(Model):
            author = BelongsTo()
            comments = HasMany("comment", inverse="post")

    Plain attributes are not declared; anything passed to the constructor
    lands in ``attrs`` and is readable and writable as an attribute.
    """

    _registry = {}
    _mapper = None
    _INSTANCE_FIELDS = ("attrs", "transient_associations")

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        associations = {
            name: assoc
            for name, assoc in cls.__dict__.items()
            if isinstance(assoc, Association)
        }

        meta_cls = cls.__dict__.get("Meta")
        meta_attrs = {}
        if meta_cls:
            for attr in dir(meta_cls):
                if not attr.startswith('_'):
                    meta_attrs[attr] = getattr(meta_cls, attr)

        cls._mapper = Mapper(cls, meta_attrs)
        for key, association in associations.items():
            association.add_methods_to_model_class(cls, key)

        model_name = cls._mapper.model_name
        if model_name in Model._registry:
            logger.debug(f"Replacing model class registered as '{model_name}'")
        Model._registry[model_name] = cls

    def __init__(self, schema=None, /, **attrs):
        object.__setattr__(self, '_schema', schema)
        object.__setattr__(self, '_orm_state', ObjectState.TRANSIENT)
        object.__setattr__(self, 'attrs', {})
        object.__setattr__(self, 'transient_associations', {})

        mapper = self._mapper
        related = {}
        for name, value in attrs.items():
            if value is UNSET:
                continue
            if mapper.is_association_key(name):
                related[name] = value
            elif name in mapper.has_many_associations_by_foreign_key:
                if value is not None:
                    mapper.has_many_associations_by_foreign_key[name].check_ids(self, value)
                    self.attrs[name] = list(value)
            else:
                self._check_attr_name(name)
                self.attrs[name] = value

        for name, value in related.items():
            setattr(self, name, value)

    def __repr__(self):
        pk_val = self.id if self.id is not None else "New"
        return f"<{self.__class__.__name__}(id={pk_val})>"

    def __getattr__(self, name):
        if name.startswith('_'):
            raise AttributeError(name)
        attrs = self.__dict__.get('attrs')
        if attrs is not None and name in attrs:
            return attrs[name]
        raise AttributeError(f"{self.__class__.__name__} has no attribute '{name}'")

    def __setattr__(self, name, value):
        if name.startswith('_'):
            object.__setattr__(self, name, value)
            return
        self._check_attr_name(name)
        if hasattr(type(self), name):
            object.__setattr__(self, name, value)
        else:
            self.attrs[name] = value

    def _check_attr_name(self, name):
        # members of Model itself cannot double as stored attributes
        check(
            name == "id" or not (hasattr(Model, name) or name in Model._INSTANCE_FIELDS),
            f"'{name}' is reserved on {type(self).__name__} and cannot be used as an attribute",
        )

    @property
    def id(self):
        return self.attrs.get("id")

    @id.setter
    def id(self, value):
        self.attrs["id"] = value

    @property
    def schema(self):
        if self._schema is None:
            raise MiniStoreError(f"{self!r} is not attached to a schema")
        return self._schema

    @property
    def state(self):
        return self._orm_state

    def is_new(self):
        return self._orm_state == ObjectState.TRANSIENT

    def is_saved(self):
        return self._orm_state == ObjectState.PERSISTENT

    def _table(self):
        return self.schema.db[self._mapper.collection_name]

    def associate(self, model, association):
        """Record ``model`` under ``association`` without propagating back."""
        key = association.key
        if isinstance(association, HasMany):
            children = getattr(self, key)
            already = any(
                m is model or (model.id is not None and m.id == model.id)
                for m in children
            )
            if not already:
                children.models.append(model)
        else:
            self.transient_associations[key] = model

    def _persist(self):
        table = self._table()
        if self.is_new():
            row = table.insert(self.attrs)
            self.attrs["id"] = row["id"]
            object.__setattr__(self, '_orm_state', ObjectState.PERSISTENT)
        else:
            table.update(self.id, self.attrs)

    def save(self):
        mapper = self._mapper
        for association in mapper.belongs_to_associations.values():
            association.save_parent(self)

        self._persist()

        if mapper.has_many_associations:
            for association in mapper.has_many_associations.values():
                association.save_children(self)
            self._persist()
        return self

    def reload(self):
        if self.is_new():
            return self
        object.__setattr__(self, 'attrs', self._table().find(self.id))
        self.transient_associations.clear()
        return self

    def update(self, attrs=None, **kwargs):
        changes = dict(attrs or {}, **kwargs)
        for name, value in changes.items():
            if value is UNSET and not self._mapper.is_foreign_key(name):
                continue
            setattr(self, name, value)
        return self.save()

    def destroy(self):
        if not self.is_new():
            self._table().remove(self.id)
        object.__setattr__(self, '_orm_state', ObjectState.DELETED)

    def to_dict(self):
        data = dict(self.attrs)
        for key in self._mapper.association_id_keys:
            data[key] = getattr(self, key)
        return data

