"""Basic usage: a field that accepts either a name string or a structured author."""

from pydantic import BaseModel

from serde_either import SingleOrVec, StringOrStruct


class Author(BaseModel):
    first_name: str
    last_name: str


class Book(BaseModel):
    title: str
    authors: StringOrStruct[Author]
    tags: SingleOrVec[str] = SingleOrVec.Vec(())

    def author_name(self) -> str:
        match self.authors:
            case StringOrStruct.String(text):
                return text
            case StringOrStruct.Struct(author):
                return f"{author.first_name} {author.last_name}"
        raise AssertionError(self.authors)


books = [
    Book.model_validate_json('{"title": "First", "authors": {"first_name": "John", "last_name": "Smith"}}'),
    Book.model_validate_json('{"title": "Second", "authors": "Michael J. Smith", "tags": "fiction"}'),
]

for book in books:
    print(f"{book.title}: {book.author_name()} tags={book.tags.payload}")

# Encoding emits the payload only; the shape is all that is written back.
print(books[1].model_dump_json())
