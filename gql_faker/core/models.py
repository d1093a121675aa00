"""JSON bodies exchanged between the editor and the server."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserIDL(BaseModel):
    """Response of ``GET /user-idl/{name}``.

    ``extension_idl`` is only present in extension-mode sessions, where
    ``schema_idl`` holds the read-only base schema. A missing ``edit_mode``
    means editing is allowed.
    """

    model_config = ConfigDict(populate_by_name=True)

    schema_idl: str = Field(alias="schemaIDL")
    extension_idl: str | None = Field(default=None, alias="extensionIDL")
    edit_mode: bool | None = Field(default=None, alias="editMode")

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class GraphQLRequest(BaseModel):
    """A standard GraphQL request body."""

    model_config = ConfigDict(populate_by_name=True)

    query: str
    variables: dict[str, Any] | None = None
    operation_name: str | None = Field(default=None, alias="operationName")
