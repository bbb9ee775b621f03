"""Static catalog of the controller resource schemas."""

from __future__ import annotations

import enum

from edgeform.schema.fragments import EPA_FEATURE, PORT_ENTRY, TRAFFIC_RULE
from edgeform.schema.models import (
    Composite,
    ListField,
    Schema,
    choice,
    number,
    schema,
    string,
)


class ResourceType(enum.Enum):
    """Resource kinds managed by the controller."""

    NODE = "node"
    NODES = "nodes"
    NODE_INTERFACE_POLICY = "node_interface_policy"
    APP = "app"
    TRAFFIC_POLICY = "traffic_policy"


NODE = schema(
    "Node",
    ("id", string("ID", readonly=True)),
    ("name", string("Name")),
    ("location", string("Location")),
    ("serial", string("Serial")),
    required=("name", "serial", "location"),
    endpoint="/nodes",
)

NODES = schema(
    "Nodes",
    ("nodes", ListField(Composite(NODE), title="Nodes")),
    endpoint="/nodes",
)

NODE_INTERFACE_POLICY = schema(
    "Node Interface Policy",
    ("id", string("ID", readonly=True)),
)

APP = schema(
    "App",
    ("id", string("ID", readonly=True)),
    ("name", string("Name")),
    ("type", choice("Type", ("container", "vm"))),
    ("version", string("Version")),
    ("vendor", string("Vendor")),
    ("description", string("Description")),
    ("cores", number("Cores", minimum=1, maximum=8)),
    ("memory", number("Memory (in MB)", minimum=1, maximum=16384)),
    ("source", string("Source")),
    ("ports", ListField(Composite(PORT_ENTRY), title="Ports", seeded=True)),
    ("epafeatures", ListField(Composite(EPA_FEATURE), title="EPA Features", seeded=True)),
    required=("name", "type", "version", "vendor", "cores", "memory", "source"),
    endpoint="/apps",
)

TRAFFIC_POLICY = schema(
    "Traffic Policy",
    ("id", string("ID", readonly=True)),
    ("name", string("Name")),
    ("traffic_rules", ListField(Composite(TRAFFIC_RULE), title="Traffic Rules")),
    required=("name", "traffic_rules"),
    endpoint="/traffic_policies",
)

_SCHEMAS: dict[ResourceType, Schema] = {
    ResourceType.NODE: NODE,
    ResourceType.NODES: NODES,
    ResourceType.NODE_INTERFACE_POLICY: NODE_INTERFACE_POLICY,
    ResourceType.APP: APP,
    ResourceType.TRAFFIC_POLICY: TRAFFIC_POLICY,
}


def get_schema(resource_type: ResourceType | str) -> Schema:
    """Look up the schema of a resource type.

    Accepts the enum member or its string value (``"traffic_policy"``).
    Raises KeyError for unknown types.
    """
    if isinstance(resource_type, str):
        try:
            resource_type = ResourceType(resource_type)
        except ValueError:
            raise KeyError(f"Unknown resource type: {resource_type}") from None
    return _SCHEMAS[resource_type]


def resource_types() -> tuple[ResourceType, ...]:
    return tuple(_SCHEMAS)
