import logging

from ministore.associations import Association, UNSET
from ministore.inflector import underscore

logger = logging.getLogger("ministore")


class BelongsTo(Association):
    """Many-to-one link tracked by a single parent id on the child."""

    def get_foreign_key(self):
        return f"{underscore(self.key)}_id"

    def points_at(self, record, owner):
        return record.attrs.get(self.foreign_key) == owner.id

    def add_methods_to_model_class(self, model_class, key):
        mapper = model_class._mapper
        self.key = key
        self.owner_model_name = mapper.model_name
        if self.model_name is None:
            self.model_name = underscore(key)
        self.foreign_key = self.get_foreign_key()
        mapper.register_association(key, self, mapper.belongs_to_associations)

        association = self
        foreign_key = self.foreign_key
        name = underscore(key)

        def get_id(record):
            if key in record.transient_associations:
                parent = record.transient_associations[key]
                return parent.id if parent is not None else None
            return record.attrs.get(foreign_key)

        def set_id(record, parent_id):
            if parent_id is UNSET:
                return
            parent = None
            if parent_id is not None:
                parent = association.related_model(record).find(parent_id)
            setattr(record, key, parent)

        def get_parent(record):
            if key not in record.transient_associations:
                parent_id = record.attrs.get(foreign_key)
                parent = None
                if parent_id is not None:
                    parent = association.related_model(record).find(parent_id)
                record.transient_associations[key] = parent
            return record.transient_associations[key]

        def set_parent(record, parent):
            if parent is UNSET:
                return
            record.transient_associations[key] = parent

            inverse = association.inverse()
            if parent is not None and inverse is not None:
                logger.debug(f"Propagating {record!r}.{key} to {inverse!r}")
                parent.associate(record, inverse)

        def new_parent(record, attrs=None, **kwargs):
            parent = association.related_model(record).new(attrs, **kwargs)
            setattr(record, key, parent)
            return parent

        def create_parent(record, attrs=None, **kwargs):
            parent = association.related_model(record).create(attrs, **kwargs)
            setattr(record, key, parent)
            record.save()
            parent.save()
            return parent.reload()

        new_parent.__name__ = f"new_{name}"
        create_parent.__name__ = f"create_{name}"

        setattr(model_class, foreign_key, property(get_id, set_id))
        setattr(model_class, key, property(get_parent, set_parent))
        setattr(model_class, new_parent.__name__, new_parent)
        setattr(model_class, create_parent.__name__, create_parent)

    def save_parent(self, child):
        if self.key not in child.transient_associations:
            return
        parent = child.transient_associations[self.key]
        if parent is not None and parent.is_new():
            parent.save()
        child.attrs[self.foreign_key] = parent.id if parent is not None else None
