from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr, field_validator

# Fixed category enumeration; stored todos and category filters must use one of these.
TODO_CATEGORIES = ("homework", "video games", "software design", "groceries")


class Todo(BaseModel):
    """A stored todo record.

    Identity is the store-assigned id: two todos with the same id are equal no
    matter what their other fields hold, and a todo never equals its bare id.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner: str
    status: bool
    body: str
    category: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Todo):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class NewTodo(BaseModel):
    """Candidate record accepted by the create operation."""
    owner: StrictStr
    body: StrictStr
    category: StrictStr
    status: StrictBool = False

    @field_validator("owner", "body", "category")
    @classmethod
    def _must_be_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must be non-empty")
        return value
