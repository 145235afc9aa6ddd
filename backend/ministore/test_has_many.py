import pytest

from ministore import UNSET
from ministore.base import Model
from ministore.collection import Collection
from ministore.errors import InvalidArgument, RecordNotFound
from ministore.example import Comment, Post, Tag
from ministore.has_many import HasMany
from ministore.schema import Schema


# --- registration ---

def test_registration_records_keys_and_foreign_keys():
    mapper = Post._mapper
    assert "comments" in mapper.association_keys
    assert "tags" in mapper.association_keys
    index = mapper.association_keys.index("comments")
    assert mapper.association_id_keys[index] == "comment_ids"
    assert mapper.has_many_associations["comments"] is mapper.associations["comments"]


def test_registration_installs_accessors_and_factories():
    for name in ("comments", "comment_ids", "tags", "tag_ids"):
        assert isinstance(getattr(Post, name), property)
    assert callable(Post.new_comment)
    assert callable(Post.create_comment)
    assert callable(Post.new_tag)
    assert callable(Post.create_tag)


def test_foreign_key_name_is_derived_from_key():
    class Shelf(Model):
        blog_entries = HasMany()
        people = HasMany("author")

    association = Shelf._mapper.associations["blog_entries"]
    assert association.foreign_key == "blog_entry_ids"
    assert association.model_name == "blog_entry"
    assert Shelf._mapper.associations["people"].foreign_key == "person_ids"
    assert callable(Shelf.new_blog_entry)
    assert callable(Shelf.create_person)


def test_reregistering_a_key_replaces_the_registry_entry():
    class Crate(Model):
        items = HasMany()

    class Item(Model):
        pass

    replacement = HasMany("item", inverse=None)
    replacement.add_methods_to_model_class(Crate, "items")

    mapper = Crate._mapper
    assert mapper.associations["items"] is replacement
    assert mapper.has_many_associations["items"] is replacement
    assert mapper.association_keys == ["items", "items"]
    assert mapper.association_id_keys == ["item_ids", "item_ids"]
    assert isinstance(Crate.items, property)
    assert callable(Crate.new_item)
    assert callable(Crate.create_item)

    schema = Schema(models=[Crate, Item])
    item = schema.items.create()
    crate = schema.crates.create()
    crate.items = [item]
    assert crate.item_ids == [item.id]


def test_subclass_inherits_association_bookkeeping():
    class Blog(Model):
        entries = HasMany()

    class Entry(Model):
        pass

    class FeaturedBlog(Blog):
        pass

    class PinnedBlog(Blog):
        pins = HasMany("entry", inverse=None)

    assert FeaturedBlog._mapper.has_many_associations["entries"] is Blog._mapper.associations["entries"]
    assert FeaturedBlog._mapper.association_id_keys == ["entry_ids"]
    assert PinnedBlog._mapper.association_keys == ["entries", "pins"]
    assert Blog._mapper.association_keys == ["entries"]

    schema = Schema(models=[FeaturedBlog, Entry])
    entry = schema.entries.create(title="first")
    blog = schema.featured_blogs.new()
    blog.entries = [entry]
    blog.save()

    assert schema.db.featured_blogs.find(blog.id)["entry_ids"] == [entry.id]
    assert blog.to_dict()["entry_ids"] == [entry.id]
    assert schema.featured_blogs.find(blog.id).entries[0].title == "first"


def test_descriptor_is_shared_by_every_instance(schema):
    first = schema.posts.new()
    second = schema.posts.new()
    first.comments = []
    assert "comments" in first.transient_associations
    assert "comments" not in second.transient_associations
    assert type(first)._mapper.associations["comments"] is type(second)._mapper.associations["comments"]


def test_explicit_inverse_missing_on_related_type_raises():
    class Kennel(Model):
        dogs = HasMany(inverse="kennel")

    class Dog(Model):
        pass

    with pytest.raises(InvalidArgument, match="kennel"):
        Kennel._mapper.associations["dogs"].inverse()


def test_implicit_and_explicit_inverses_resolve():
    assert Post._mapper.associations["comments"].inverse() is Comment._mapper.associations["post"]
    assert Comment._mapper.associations["post"].inverse() is Post._mapper.associations["comments"]
    assert Post._mapper.associations["tags"].inverse() is None


# --- foreign key accessor ---

def test_foreign_key_defaults_to_empty_list(post):
    assert post.comment_ids == []


def test_foreign_key_read_uses_attrs_until_collection_is_materialized(schema, comments):
    post = schema.posts.new(comment_ids=[comments[1].id, comments[0].id])
    assert post.comment_ids == [comments[1].id, comments[0].id]
    assert post.transient_associations == {}


def test_foreign_key_write_round_trips_through_lookup(post, comments):
    ids = [comments[2].id, comments[0].id]
    post.comment_ids = ids
    assert [c.id for c in post.comments] == ids
    assert post.comment_ids == ids


def test_foreign_key_write_none_clears(post, comments):
    post.comments = comments
    post.comment_ids = None
    assert isinstance(post.comments, Collection)
    assert len(post.comments) == 0
    assert post.comment_ids == []


def test_foreign_key_write_unset_is_a_no_op(post, comments):
    post.comments = comments[:2]
    before = post.comments
    post.comment_ids = UNSET
    assert post.comments is before
    assert post.comment_ids == [comments[0].id, comments[1].id]


@pytest.mark.parametrize("value", ["1,2", 5, {"id": 1}, {1, 2}])
def test_foreign_key_write_rejects_non_lists(post, comments, value):
    post.comments = comments[:1]
    before = post.comments
    with pytest.raises(InvalidArgument) as excinfo:
        post.comment_ids = value
    message = str(excinfo.value)
    assert "comment_ids" in message
    assert repr(post) in message
    assert post.comments is before
    assert post.comment_ids == [comments[0].id]


def test_foreign_key_write_accepts_tuples(post, comments):
    post.comment_ids = (comments[1].id,)
    assert post.comment_ids == [comments[1].id]


def test_lookup_failure_propagates_and_keeps_state(post, comments):
    post.comments = comments[:1]
    with pytest.raises(RecordNotFound):
        post.comment_ids = [comments[0].id, 999]
    assert post.comment_ids == [comments[0].id]


def test_constructor_rejects_non_list_foreign_key(schema):
    with pytest.raises(InvalidArgument):
        schema.posts.new(comment_ids="1")


# --- relationship accessor ---

def test_assigning_records_derives_ids(post, comments):
    c1, c2, _ = comments
    post.comments = [c1, c2]
    assert post.comment_ids == [c1.id, c2.id]


def test_assigning_empty_ids_gives_empty_typed_collection(post):
    post.comment_ids = []
    assert isinstance(post.comments, Collection)
    assert post.comments.model_name == "comment"
    assert len(post.comments) == 0


def test_reading_twice_returns_cached_collection(post):
    assert post.comments is post.comments


def test_cached_read_does_not_touch_storage(schema, comments):
    post = schema.posts.create(comment_ids=[comments[0].id])
    first = post.comments
    schema.db.comments.remove()
    assert post.comments is first
    assert first.ids == [comments[0].id]


def test_read_resolves_stored_ids(schema, comments):
    post = schema.posts.create(comment_ids=[comments[2].id, comments[1].id])
    post = schema.posts.find(post.id)
    assert [c.text for c in post.comments] == ["comment 3", "comment 2"]


def test_write_replaces_cached_collection(post, comments):
    post.comments = comments[:1]
    first = post.comments
    post.comments = comments[1:]
    assert post.comments is not first
    assert post.comment_ids == [comments[1].id, comments[2].id]
    assert first.ids == [comments[0].id]


def test_write_accepts_collection_and_drops_none(schema, post, comments):
    other = schema.posts.create()
    other.comments = Collection("comment", [comments[0], None, comments[1]])
    assert other.comment_ids == [comments[0].id, comments[1].id]
    post.comments = other.comments
    assert post.comment_ids == other.comment_ids
    assert post.comments is not other.comments


def test_write_none_means_no_related_records(post, comments):
    post.comments = comments
    post.comments = None
    assert post.comment_ids == []


def test_write_includes_unsaved_records(schema, post):
    pending = schema.comments.new(text="draft")
    post.comments = [pending]
    assert post.comments[0] is pending
    assert post.comment_ids == [None]


# --- inverse propagation ---

def test_assignment_propagates_to_inverse(post, comments):
    c1, c2, _ = comments
    post.comments = [c1, c2]
    assert c1.post is post
    assert c2.post is post
    assert c1.post_id == post.id


def test_inverse_called_once_per_record_after_cache_update(monkeypatch, post, comments):
    c1, c2, _ = comments
    calls = []
    original = Comment.associate

    def spy(record, owner, association):
        calls.append((record, owner, association, owner.comment_ids))
        return original(record, owner, association)

    monkeypatch.setattr(Comment, "associate", spy)
    post.comments = [c1, c2]

    inverse = Comment._mapper.associations["post"]
    assert calls == [
        (c1, post, inverse, [c1.id, c2.id]),
        (c2, post, inverse, [c1.id, c2.id]),
    ]


def test_association_without_inverse_does_not_propagate(monkeypatch, schema, post):
    tag = schema.tags.create(name="python")
    called = []
    monkeypatch.setattr(Tag, "associate", lambda *args: called.append(args))
    post.tags = [tag]
    assert post.tag_ids == [tag.id]
    assert called == []


def test_removed_records_keep_inverse_pointer(post, comments):
    c1, c2, _ = comments
    post.comments = [c1, c2]
    post.comments = [c2]
    assert c1.post is post
    assert c2.post is post


def test_id_assignment_propagates_to_resolved_records(post, comments):
    post.comment_ids = [comments[0].id]
    assert post.comments[0].post is post


# --- child factories ---

def test_new_child_appends_unsaved_record(schema, post, comments):
    post.comments = comments[:1]
    stored_before = schema.db.posts.find(post.id)

    child = post.new_comment({"text": "hi"})

    assert child.is_new()
    assert child.text == "hi"
    assert post.comments.models == [comments[0], child]
    assert child.post is post
    assert schema.db.posts.find(post.id) == stored_before
    assert len(schema.db.comments) == 3


def test_new_child_accepts_keyword_attrs(post):
    child = post.new_comment(text="kw")
    assert child.attrs == {"text": "kw"}


def test_new_child_does_not_mutate_previously_read_collection(post, comments):
    post.comments = comments[:1]
    before = post.comments
    post.new_comment()
    assert len(before) == 1
    assert len(post.comments) == 2


def test_create_child_persists_child_and_owner(schema, post):
    child = post.create_comment({"text": "hi"})

    assert child.is_saved()
    assert child.post_id == post.id
    assert schema.db.comments.find(child.id)["post_id"] == post.id
    assert schema.db.posts.find(post.id)["comment_ids"] == [child.id]
    assert post.comment_ids == [child.id]


def test_create_child_on_unsaved_owner_saves_both(schema):
    post = schema.posts.new(title="fresh")
    child = post.create_comment(text="first")
    assert post.is_saved()
    assert schema.db.comments.find(child.id)["post_id"] == post.id
    assert schema.db.posts.find(post.id)["comment_ids"] == [child.id]


def test_create_child_returns_reloaded_record(schema, post):
    child = post.create_comment(text="hi")
    assert child.transient_associations == {}
    assert child.post.id == post.id
