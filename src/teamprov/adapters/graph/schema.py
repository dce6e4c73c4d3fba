"""Pydantic models describing the Microsoft Graph payloads the provisioner reads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class GraphBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class GraphInnerError(GraphBaseModel):
    code: str | None = None
    message: str | None = None
    request_id: str | None = Field(default=None, alias="request-id")


class GraphErrorDetail(GraphBaseModel):
    code: str | None = None
    message: str = ""
    inner_error: GraphInnerError | None = Field(default=None, alias="innerError")


class GraphErrorResponse(GraphBaseModel):
    error: GraphErrorDetail


class GraphObject(GraphBaseModel):
    id: str


class NamedGraphObject(GraphObject):
    display_name: str | None = Field(default=None, alias="displayName")


class GraphPage(GraphBaseModel):
    next_link: str | None = Field(default=None, alias="@odata.nextLink")


class GraphObjectPage(GraphPage):
    value: list[GraphObject] = Field(default_factory=list[GraphObject])


class NamedGraphObjectPage(GraphPage):
    value: list[NamedGraphObject] = Field(default_factory=list[NamedGraphObject])
