class MiniStoreError(Exception):
    pass


class InvalidArgument(MiniStoreError, ValueError):
    pass


class RecordNotFound(MiniStoreError, LookupError):
    def __init__(self, collection_name, ids):
        self.collection_name = collection_name
        self.ids = ids
        super().__init__(f"Couldn't find {collection_name} with id(s) {ids}")


def check(condition, message, error=InvalidArgument):
    if not condition:
        raise error(message)
