from ministore.base import Model
from ministore.belongs_to import BelongsTo
from ministore.has_many import HasMany


class Author(Model):
    posts = HasMany()


class Post(Model):
    author = BelongsTo()
    comments = HasMany("comment", inverse="post")
    tags = HasMany(inverse=None)


class Comment(Model):
    post = BelongsTo()


class Tag(Model):
    pass


MODELS = (Author, Post, Comment, Tag)
