from ministore.errors import check


class Collection:
    """Ordered group of records of a single model type."""

    def __init__(self, model_name, models=None):
        check(model_name, "You must pass a model name into a Collection")
        self.model_name = model_name
        self.models = list(models) if models is not None else []

    def __repr__(self):
        return f"<Collection {self.model_name} {self.models!r}>"

    def __len__(self):
        return len(self.models)

    def __iter__(self):
        return iter(self.models)

    def __getitem__(self, index):
        return self.models[index]

    def __contains__(self, model):
        return any(m is model for m in self.models)

    @property
    def length(self):
        return len(self.models)

    @property
    def ids(self):
        return [m.id for m in self.models]

    def update(self, attrs=None, **kwargs):
        for model in self.models:
            model.update(attrs, **kwargs)
        return self

    def save(self):
        for model in self.models:
            model.save()
        return self

    def reload(self):
        for model in self.models:
            model.reload()
        return self

    def destroy(self):
        for model in self.models:
            model.destroy()
        return self

    def filter(self, predicate):
        return Collection(self.model_name, [m for m in self.models if predicate(m)])

    def sort(self, key, reverse=False):
        return Collection(self.model_name, sorted(self.models, key=key, reverse=reverse))

    def slice(self, begin, end=None):
        return Collection(self.model_name, self.models[begin:end])

    def merge(self, other):
        self.models.extend(other.models)
        return self
