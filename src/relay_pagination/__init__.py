from relay_pagination.builder import apollo_connection_builder, connection_builder
from relay_pagination.connectors.memory import SequenceOperators, list_paginator
from relay_pagination.operators import NodesOperators

VERSION = "0.1.0"

__all__ = [
    "apollo_connection_builder",
    "connection_builder",
    "list_paginator",
    "NodesOperators",
    "SequenceOperators",
]
