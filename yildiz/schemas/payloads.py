"""
Request bodies sent by the typed client.

Field names follow the server's camelCase wire format through aliases;
Python code populates them by their snake_case names.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


Identifier = str | int


class Payload(BaseModel):
    """Base for all request bodies."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        """Serialize with the server's field names."""
        return self.model_dump(by_alias=True, mode="json")


class TranslationPayload(Payload):
    """Body of a translate-and-store call."""

    value: Identifier = Field(..., description="Value that will be translated")
    data: dict[str, Any] = Field(default_factory=dict)
    ttld: bool = Field(default=False, description="Delete this value after the TTL")


class NodePayload(Payload):
    """Body of a node creation."""

    identifier: Identifier = Field(
        ...,
        description="Hash identifier; the server converts strings itself",
    )
    data: dict[str, Any] = Field(default_factory=dict)
    ttld: bool = False
    extend: dict[str, Any] = Field(
        default_factory=dict,
        description="Values for custom extended database columns",
    )


class EdgeKeyPayload(Payload):
    """Identifies an edge by its two node ids and relation."""

    left_id: Identifier = Field(..., alias="leftId")
    right_id: Identifier = Field(..., alias="rightId")
    relation: Identifier = "1"


class EdgePayload(EdgeKeyPayload):
    """Body of an edge creation."""

    attributes: dict[str, Any] = Field(default_factory=dict)
    ttld: bool = False
    extend: dict[str, Any] = Field(default_factory=dict)


class TranslatedEdgeInfoPayload(Payload):
    values: list[Identifier] = Field(default_factory=list)


class UpsertRelationPayload(Payload):
    """
    Body of a singular relation upsert.

    Creates both nodes and their translations if missing, and one edge
    between them (or increases the depth of the existing edge).
    """

    left_node_identifier_val: Identifier = Field(..., alias="leftNodeIdentifierVal")
    right_node_identifier_val: Identifier = Field(..., alias="rightNodeIdentifierVal")
    left_node_data: dict[str, Any] = Field(default_factory=dict, alias="leftNodeData")
    right_node_data: dict[str, Any] = Field(default_factory=dict, alias="rightNodeData")
    ttld: bool = False
    relation: Identifier = "1"
    edge_data: dict[str, Any] = Field(default_factory=dict, alias="edgeData")
    depth_before_creation: bool = Field(
        default=True,
        alias="depthBeforeCreation",
        description="True always creates a new edge, False increases depth",
    )
    is_popular_right_node: bool = Field(default=False, alias="isPopularRightNode")
    edge_time: int = Field(
        ...,
        alias="edgeTime",
        description="Event time in unix epoch milliseconds",
    )


class RawQueryPayload(Payload):
    query: str = Field(..., min_length=1)
    replacements: Any = None


class ShortestPathPayload(Payload):
    start: Identifier
    end: Identifier
