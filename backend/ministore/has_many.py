import logging

from ministore.associations import Association, UNSET
from ministore.collection import Collection
from ministore.errors import check
from ministore.inflector import singularize, underscore

logger = logging.getLogger("ministore")


class HasMany(Association):
    """One-to-many link tracked by a list of ids on the owner.

    Declaring ``comments = HasMany("comment")`` on ``Post`` gives every post:

    - ``post.comment_ids``: list of related ids, read / write
    - ``post.comments``: :class:`Collection` of related records, read / write
    - ``post.new_comment(attrs)``: build an unsaved child and append it
    - ``post.create_comment(attrs)``: persist a child, append it, save the post

    Once ``post.comments`` has been read or written it is cached on the
    record and ``post.comment_ids`` is derived from it. Until then the ids
    in ``post.attrs`` are used.
    """

    def get_foreign_key(self):
        return f"{singularize(underscore(self.key))}_ids"

    def check_ids(self, record, ids):
        check(
            isinstance(ids, (list, tuple)),
            f"You must pass a list in when setting {self.foreign_key} on {record!r}",
        )

    def points_at(self, record, owner):
        return owner.id in (record.attrs.get(self.foreign_key) or [])

    def add_methods_to_model_class(self, model_class, key):
        mapper = model_class._mapper
        self.key = key
        self.owner_model_name = mapper.model_name
        if self.model_name is None:
            self.model_name = singularize(underscore(key))
        self.foreign_key = self.get_foreign_key()
        mapper.register_association(key, self, mapper.has_many_associations)

        association = self
        foreign_key = self.foreign_key
        singular = singularize(underscore(key))

        def get_ids(record):
            children = record.transient_associations.get(key)
            if children is not None:
                return [child.id for child in children.models]
            return list(record.attrs.get(foreign_key) or [])

        def set_ids(record, ids):
            if ids is UNSET:
                return
            if ids is None:
                children = []
            else:
                association.check_ids(record, ids)
                logger.debug(f"Resolving {record!r}.{foreign_key} = {list(ids)}")
                children = association.related_model(record).find(list(ids)).models
            setattr(record, key, children)

        def get_children(record):
            children = record.transient_associations.get(key)
            if children is None:
                ids = getattr(record, foreign_key)
                if ids:
                    children = association.related_model(record).find(ids)
                else:
                    children = Collection(association.model_name)
                record.transient_associations[key] = children
            return children

        def set_children(record, models):
            if models is UNSET:
                return
            models = [m for m in (models or []) if m is not None]
            record.transient_associations[key] = Collection(association.model_name, models)

            inverse = association.inverse()
            if inverse is not None:
                logger.debug(f"Propagating {record!r}.{key} to {inverse!r} on {len(models)} record(s)")
                for model in models:
                    model.associate(record, inverse)

        def new_child(record, attrs=None, **kwargs):
            child = association.related_model(record).new(attrs, **kwargs)
            setattr(record, key, [*getattr(record, key), child])
            return child

        def create_child(record, attrs=None, **kwargs):
            child = association.related_model(record).create(attrs, **kwargs)
            setattr(record, key, [*getattr(record, key), child])
            record.save()
            return child.reload()

        new_child.__name__ = f"new_{singular}"
        create_child.__name__ = f"create_{singular}"

        setattr(model_class, foreign_key, property(get_ids, set_ids))
        setattr(model_class, key, property(get_children, set_children))
        setattr(model_class, new_child.__name__, new_child)
        setattr(model_class, create_child.__name__, create_child)

    def save_children(self, owner):
        children = owner.transient_associations.get(self.key)
        if children is None:
            return

        inverse = self.inverse()
        for child in children:
            stale = inverse is not None and not inverse.points_at(child, owner)
            if child.is_new() or stale:
                child.save()
        owner.attrs[self.foreign_key] = children.ids
