"""
Yildiz Client

Typed operations for the Yildiz graph service: translations, nodes, edges,
relation upserts, raw queries and path finding.
"""

from __future__ import annotations

import time
from typing import Any, Optional
from urllib.parse import quote

import httpx

from yildiz.config import ClientConfig
from yildiz.http import HttpClient, HttpResponse
from yildiz.schemas.payloads import (
    EdgeKeyPayload,
    EdgePayload,
    Identifier,
    NodePayload,
    Payload,
    RawQueryPayload,
    ShortestPathPayload,
    TranslatedEdgeInfoPayload,
    TranslationPayload,
    UpsertRelationPayload,
)
from yildiz.schemas.results import interpret_lookup, unwrap


def _segment(value: Identifier) -> str:
    return quote(str(value), safe="")


def _now_ms() -> int:
    return int(time.time() * 1000)


class YildizClient:
    """
    Client for the Yildiz HTTP API.

    Usage:
        with YildizClient(prefix="my_tenant", host="yildiz.local") as client:
            node = client.create_node("user:42", data={"name": "Ada"})
            same = client.get_node(node["identifier"])
            missing = client.get_node(0)  # None

    Lookup operations (get/delete/depth changes) return None when the server
    answers 404. Create and query operations raise StatusMismatchException
    on an unexpected status.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        http: Optional[HttpClient] = None,
        **overrides: Any,
    ) -> None:
        if config is not None and overrides:
            raise ValueError("Pass either a ClientConfig or keyword overrides, not both")
        if http is not None:
            self.http = http
        else:
            self.http = HttpClient(config or ClientConfig(**overrides), transport=transport)
        self.config = self.http.config

    def raw(
        self,
        path: str,
        *,
        method: str = "GET",
        headers: Optional[dict[str, str]] = None,
        body: Any = None,
        timeout_ms: Optional[int] = None,
        expected_status: Optional[int] = None,
    ) -> HttpResponse:
        """Send a request as-is and return the normalized response."""
        return self.http.execute(
            path,
            method=method,
            headers=headers,
            body=body,
            timeout_ms=timeout_ms,
            expected_status=expected_status,
        )

    def _create(self, path: str, payload: Payload) -> Any:
        return self.raw(path, method="POST", body=payload.to_wire(), expected_status=201).body

    def _query(self, path: str, payload: Optional[Payload] = None) -> Any:
        if payload is None:
            return self.raw(path, expected_status=200).body
        return self.raw(path, method="POST", body=payload.to_wire(), expected_status=200).body

    def _lookup(self, path: str, method: str = "GET", payload: Optional[Payload] = None) -> Any:
        body = payload.to_wire() if payload is not None else None
        return unwrap(interpret_lookup(self.raw(path, method=method, body=body)))

    # -------------------------------------------------------------------------
    # Admin
    # -------------------------------------------------------------------------

    def get_server_version(self) -> Optional[str]:
        body = self._query("/")
        return body.get("version") if isinstance(body, dict) else None

    def is_alive(self) -> bool:
        self._query("/admin/healthcheck")
        return True

    def get_health(self) -> Any:
        return self._query("/admin/health")

    def get_stats(self) -> Any:
        return self._query("/admin/stats")

    def get_metrics(self) -> Any:
        return self._query("/admin/metrics")

    def check_auth(self) -> int:
        """Return the status code of an authenticated no-op call."""
        return self.raw("/admin/authcheck", expected_status=200).status_code

    # -------------------------------------------------------------------------
    # Translations
    # -------------------------------------------------------------------------

    def store_translation(
        self,
        value: Identifier,
        data: Optional[dict[str, Any]] = None,
        ttld: bool = False,
    ) -> Any:
        """
        Translate and store a new value.

        Args:
            value: Value that will be translated
            data: Optional data object
            ttld: Delete this value after the TTL, defaults to False

        Returns:
            The created translation
        """
        payload = TranslationPayload(value=value, data=data or {}, ttld=ttld)
        return self._create("/translator/translate-and-store", payload)

    def get_translation(self, identifier: Identifier) -> Any:
        return self._lookup(f"/translator/{_segment(identifier)}")

    def delete_translation(self, identifier: Identifier) -> Any:
        return self._lookup(f"/translator/{_segment(identifier)}", method="DELETE")

    # -------------------------------------------------------------------------
    # Nodes
    # -------------------------------------------------------------------------

    def create_node(
        self,
        identifier: Identifier,
        data: Optional[dict[str, Any]] = None,
        ttld: bool = False,
        extend: Optional[dict[str, Any]] = None,
    ) -> Any:
        """
        Create a new graph node.

        Args:
            identifier: Hash identifier (strings are converted by the server)
            data: Optional data object
            ttld: Delete this node after the TTL, defaults to False
            extend: Values for custom extended database columns

        Returns:
            The created node
        """
        payload = NodePayload(identifier=identifier, data=data or {}, ttld=ttld, extend=extend or {})
        return self._create("/node", payload)

    def get_node(self, identifier: Identifier) -> Any:
        return self._lookup(f"/node/{_segment(identifier)}")

    def delete_node(self, identifier: Identifier) -> Any:
        return self._lookup(f"/node/{_segment(identifier)}", method="DELETE")

    # -------------------------------------------------------------------------
    # Edges
    # -------------------------------------------------------------------------

    def create_edge(
        self,
        left_id: Identifier,
        right_id: Identifier,
        relation: Identifier = "1",
        attributes: Optional[dict[str, Any]] = None,
        ttld: bool = False,
        extend: Optional[dict[str, Any]] = None,
    ) -> Any:
        """
        Create a new graph edge.

        Args:
            left_id: Yildiz id of the left node (not its identifier)
            right_id: Yildiz id of the right node (not its identifier)
            relation: Relation description
            attributes: Optional edge attributes
            ttld: Delete this edge after the TTL, defaults to False
            extend: Values for custom extended database columns

        Returns:
            The server confirmation ({"success": ...})
        """
        payload = EdgePayload(
            left_id=left_id,
            right_id=right_id,
            relation=relation,
            attributes=attributes or {},
            ttld=ttld,
            extend=extend or {},
        )
        return self._create("/edge", payload)

    def _edge_path(self, left_id: Identifier, right_id: Identifier, relation: Identifier) -> str:
        return f"/edge/{_segment(left_id)}/{_segment(right_id)}/{_segment(relation)}"

    def get_edge(self, left_id: Identifier, right_id: Identifier, relation: Identifier) -> Any:
        return self._lookup(self._edge_path(left_id, right_id, relation))

    def delete_edge(self, left_id: Identifier, right_id: Identifier, relation: Identifier) -> Any:
        return self._lookup(self._edge_path(left_id, right_id, relation), method="DELETE")

    def increase_edge_depth(
        self,
        left_id: Identifier,
        right_id: Identifier,
        relation: Identifier = "1",
    ) -> Any:
        payload = EdgeKeyPayload(left_id=left_id, right_id=right_id, relation=relation)
        return self._lookup("/edge/depth/increase", method="PUT", payload=payload)

    def decrease_edge_depth(
        self,
        left_id: Identifier,
        right_id: Identifier,
        relation: Identifier = "1",
    ) -> Any:
        payload = EdgeKeyPayload(left_id=left_id, right_id=right_id, relation=relation)
        return self._lookup("/edge/depth/decrease", method="PUT", payload=payload)

    def get_all_edges_from_left(self, left_id: Identifier, relation: Identifier) -> Any:
        return self._query(f"/edge/left/{_segment(left_id)}/{_segment(relation)}")

    def get_all_edges_from_right(self, right_id: Identifier, relation: Identifier) -> Any:
        return self._query(f"/edge/right/{_segment(right_id)}/{_segment(relation)}")

    def get_all_edges_for_left_or_right(self, node_id: Identifier, relation: Identifier) -> Any:
        return self._query(f"/edge/both/{_segment(node_id)}/{_segment(relation)}")

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def get_translated_edge_info_for_nodes(self, values: Optional[list[Identifier]] = None) -> Any:
        payload = TranslatedEdgeInfoPayload(values=values or [])
        return self._query("/access/translated-edge-info", payload)

    def upsert_relation(
        self,
        left_node_identifier_val: Identifier,
        right_node_identifier_val: Identifier,
        left_node_data: Optional[dict[str, Any]] = None,
        right_node_data: Optional[dict[str, Any]] = None,
        ttld: bool = False,
        relation: Identifier = "1",
        edge_data: Optional[dict[str, Any]] = None,
        depth_before_creation: bool = True,
        is_popular_right_node: bool = False,
        edge_time: Optional[int] = None,
    ) -> Any:
        """
        Create two nodes, their translations and one edge between them.

        Nodes and translations are only created if missing. Depending on
        ``depth_before_creation`` the edge is always created anew, or the
        depth of an existing edge is increased; do not mix both modes on
        the same relation. Runs inside a database transaction.

        Args:
            left_node_identifier_val: Value of the left node, turned into its identifier
            right_node_identifier_val: Value of the right node, turned into its identifier
            left_node_data: Additional data for the left node
            right_node_data: Additional data for the right node
            ttld: TTL flag for every created resource
            relation: Relation of the edge
            edge_data: Additional data for the edge
            depth_before_creation: Always create a new edge if True
            is_popular_right_node: Hint that the right node is used extensively
            edge_time: Event time in epoch milliseconds, defaults to now

        Returns:
            The created or selected ids and identifiers
        """
        return self._upsert(
            "/access/upsert-singular-relation",
            left_node_identifier_val,
            right_node_identifier_val,
            left_node_data,
            right_node_data,
            ttld,
            relation,
            edge_data,
            depth_before_creation,
            is_popular_right_node,
            edge_time,
        )

    def upsert_relation_no_transaction(
        self,
        left_node_identifier_val: Identifier,
        right_node_identifier_val: Identifier,
        left_node_data: Optional[dict[str, Any]] = None,
        right_node_data: Optional[dict[str, Any]] = None,
        ttld: bool = False,
        relation: Identifier = "1",
        edge_data: Optional[dict[str, Any]] = None,
        depth_before_creation: bool = True,
        is_popular_right_node: bool = False,
        edge_time: Optional[int] = None,
    ) -> Any:
        """Same as upsert_relation, without a database transaction."""
        return self._upsert(
            "/access/upsert-singular-relation-no-transaction",
            left_node_identifier_val,
            right_node_identifier_val,
            left_node_data,
            right_node_data,
            ttld,
            relation,
            edge_data,
            depth_before_creation,
            is_popular_right_node,
            edge_time,
        )

    def _upsert(
        self,
        path: str,
        left_node_identifier_val: Identifier,
        right_node_identifier_val: Identifier,
        left_node_data: Optional[dict[str, Any]],
        right_node_data: Optional[dict[str, Any]],
        ttld: bool,
        relation: Identifier,
        edge_data: Optional[dict[str, Any]],
        depth_before_creation: bool,
        is_popular_right_node: bool,
        edge_time: Optional[int],
    ) -> Any:
        payload = UpsertRelationPayload(
            left_node_identifier_val=left_node_identifier_val,
            right_node_identifier_val=right_node_identifier_val,
            left_node_data=left_node_data or {},
            right_node_data=right_node_data or {},
            ttld=ttld,
            relation=relation,
            edge_data=edge_data or {},
            depth_before_creation=depth_before_creation,
            is_popular_right_node=is_popular_right_node,
            edge_time=edge_time if edge_time is not None else _now_ms(),
        )
        return self._query(path, payload)

    # -------------------------------------------------------------------------
    # Raw queries and paths
    # -------------------------------------------------------------------------

    def run_raw_query(self, query: str, replacements: Any = None) -> Any:
        """Run a raw query and return its result rows."""
        return self._query("/raw/query", RawQueryPayload(query=query, replacements=replacements))

    def run_raw_spread(self, query: str, replacements: Any = None) -> Any:
        """Run a raw query and return its metadata."""
        return self._query("/raw/spread", RawQueryPayload(query=query, replacements=replacements))

    def get_shortest_path(self, start: Identifier, end: Identifier) -> Any:
        return self._query("/path/shortest-path", ShortestPathPayload(start=start, end=end))

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> "YildizClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()
