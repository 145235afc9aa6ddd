from ministore.inflector import pluralize, underscore


class Mapper:
    """Relationship schema of one model class, built when the class is defined.

    Instances never hold a copy; they reach it through ``type(record)._mapper``.
    """

    def __init__(self, cls, meta_attrs=None):
        self.cls = cls
        self.meta = meta_attrs or {}

        self.model_name = self.meta.get("model_name", underscore(cls.__name__))
        self.collection_name = self.meta.get("collection_name", pluralize(self.model_name))

        self.parent = None
        self._resolve_parent()

        self.associations = {}
        self.has_many_associations = {}
        self.belongs_to_associations = {}
        self.association_keys = []
        self.association_id_keys = []
        if self.parent:
            self._inherit_associations(self.parent)

    def __repr__(self):
        keys = ", ".join(self.association_keys)
        return (
            f"<Mapper class={self.cls.__name__} model={self.model_name} "
            f"collection={self.collection_name} associations=[{keys}]>"
        )

    def _resolve_parent(self):
        for base in self.cls.__bases__:
            if getattr(base, "_mapper", None) is not None:
                self.parent = base._mapper
                return

    def _inherit_associations(self, parent):
        # accessors are inherited as class attributes, only the bookkeeping is copied
        self.associations.update(parent.associations)
        self.has_many_associations.update(parent.has_many_associations)
        self.belongs_to_associations.update(parent.belongs_to_associations)
        self.association_keys.extend(parent.association_keys)
        self.association_id_keys.extend(parent.association_id_keys)

    def register_association(self, key, association, kind_registry):
        self.associations[key] = association
        kind_registry[key] = association
        self.association_keys.append(key)
        self.association_id_keys.append(association.foreign_key)

    @property
    def has_many_associations_by_foreign_key(self):
        return {a.foreign_key: a for a in self.has_many_associations.values()}

    def is_association_key(self, name):
        return name in self.associations

    def is_foreign_key(self, name):
        return name in self.association_id_keys
