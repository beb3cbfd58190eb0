"""Remote listing entry models."""

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ObjectKind(str, Enum):
    """Git object kinds reported by the items API."""

    TREE = "tree"
    BLOB = "blob"


class RemoteEntry(BaseModel):
    """One item of a one-level directory listing.

    Only lives while its listing is being processed.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    git_object_type: str = Field(default="", alias="gitObjectType")
    path: str = ""
    url: str = ""

    @field_validator("git_object_type", "path", "url", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> str:
        # null reads as empty, numbers and booleans as their JSON text
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (dict, list)):
            return json.dumps(value, separators=(",", ":"))
        return str(value)

    @property
    def kind(self) -> ObjectKind | None:
        try:
            return ObjectKind(self.git_object_type)
        except ValueError:
            return None

    @property
    def name(self) -> str:
        """Final segment of the entry path."""
        return self.path.rsplit("/", 1)[-1]
