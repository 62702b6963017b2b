"""Pydantic models for GitHub repository list responses.

Only the fields the client exposes are declared; anything else GitHub sends
is ignored. Scalar fields are strict: "42" is not an id and 0 is not a
boolean. Models are frozen once validated.
"""

from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt, StrictStr, TypeAdapter

__all__ = ["Owner", "Repository", "RepositoryList"]


class Owner(BaseModel):
    """Account that owns a repository."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    login: StrictStr


class Repository(BaseModel):
    """A repository as returned by ``GET /user/repos``.

    Attributes:
        id: GitHub repository ID
        name: Short name (``repo``)
        full_name: Fully qualified name (``owner/repo``)
        private: True for private repositories
        archived: True for archived repositories (absent on some API versions)
        html_url: Web URL of the repository
        owner: Owning account
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: StrictInt
    name: StrictStr
    full_name: StrictStr
    private: StrictBool
    archived: StrictBool = False
    html_url: StrictStr
    owner: Owner


# Validates a whole page body in one pass (JSON parse + shape check)
RepositoryList = TypeAdapter(list[Repository])
