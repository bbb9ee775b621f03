"""Reusable schema fragments shared across resources.

The packet filters are defined once here and composed into both the
``source`` and ``destination`` selectors of a traffic rule, so the two
sides always carry identical filter definitions.
"""

from __future__ import annotations

from edgeform.schema.models import (
    Composite,
    ListField,
    Scalar,
    Schema,
    choice,
    number,
    schema,
    string,
)

IPV4_PATTERN = (
    r"^(([0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5]).){3}"
    r"([0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])$"
)
MAC_PATTERN = r"^([a-fA-F0-9]{2}[-:]){5}([a-fA-F0-9]{2})$"
IMSI_PATTERN = r"^([0-9]{14,15})$"

IP_MESSAGE = "Please, enter a valid IP address."
MAC_MESSAGE = "Please, enter a valid MAC address."
IMSI_MESSAGE = "Please, enter a valid IMSI."

FILTER_PROTOCOLS = ("all", "tcp", "udp", "icmp", "sctp")
TARGET_ACTIONS = ("accept", "reject", "drop")
PORT_PROTOCOLS = ("tcp", "udp", "sctp")


def _ip_address(title: str) -> Scalar:
    return string(title, pattern=IPV4_PATTERN, validation_message=IP_MESSAGE)


def _mac_address(title: str) -> Scalar:
    return string(title, pattern=MAC_PATTERN, validation_message=MAC_MESSAGE)


MAC_FILTER = schema(
    "MAC Filter",
    ("mac_addresses", ListField(_mac_address("MAC Address"), title="MAC Addresses")),
)

IP_FILTER = schema(
    "IP Filter",
    ("address", _ip_address("IP Address")),
    ("mask", number("Mask", minimum=0, maximum=128)),
    ("begin_port", number("Begin Port", minimum=0, maximum=65535)),
    ("end_port", number("End Port", minimum=0, maximum=65535)),
    ("protocol", choice("Protocol", FILTER_PROTOCOLS)),
    required=("address",),
    ordered=(("begin_port", "end_port"),),
)

GTP_FILTER = schema(
    "GTP Filter",
    ("address", _ip_address("Address")),
    ("mask", number("Mask", minimum=0, maximum=128)),
    (
        "imsis",
        ListField(
            string("IMSI", pattern=IMSI_PATTERN, validation_message=IMSI_MESSAGE),
            title="IMSIs",
        ),
    ),
    required=("address",),
)


def selector(title: str) -> Schema:
    """A traffic selector: a description plus any combination of filters."""
    return schema(
        title,
        ("description", string("Description")),
        ("mac_filter", Composite(MAC_FILTER)),
        ("ip_filter", Composite(IP_FILTER)),
        ("gtp_filter", Composite(GTP_FILTER)),
    )


MAC_MODIFIER = schema(
    "MAC Modifier",
    ("mac_address", _mac_address("MAC Address")),
    required=("mac_address",),
)

IP_MODIFIER = schema(
    "IP Modifier",
    ("address", _ip_address("IP Address")),
    ("port", number("Port", minimum=1, maximum=65535)),
    required=("address", "port"),
)

TARGET = schema(
    "Target",
    ("description", string("Description")),
    ("action", choice("Action", TARGET_ACTIONS, default="accept")),
    ("mac_modifier", Composite(MAC_MODIFIER)),
    ("ip_modifier", Composite(IP_MODIFIER)),
    required=("action",),
)

TRAFFIC_RULE = schema(
    "Traffic Rule",
    ("description", string("Description")),
    ("priority", number("Priority", minimum=1, maximum=65535)),
    ("source", Composite(selector("Source"))),
    ("destination", Composite(selector("Destination"))),
    ("target", Composite(TARGET)),
    required=("priority",),
)

PORT_ENTRY = schema(
    "Port",
    ("port", number("Port", minimum=1, maximum=65535)),
    ("protocol", choice("Protocol", PORT_PROTOCOLS)),
    required=("port", "protocol"),
)

EPA_FEATURE = schema(
    "EPA Feature",
    ("key", string("EPA Feature Key")),
    ("value", string("EPA Feature Value")),
    required=("key",),
)
