"""Read and write .properties key/value files.

File format:
    # comment                   ! comment
    key = value                 # both sides trimmed, first '=' splits
    long = first \\
           second               # continuation: long -> "firstsecond"

Values are strings. ${NAME} expansion and other transforms are registered as
resolvers and applied only on read.
"""

from propfile.errors import EmptyKeyError, InvalidPairError, PropertiesError, PropertyNotFoundError
from propfile.models import MutablePair, Pair, to_property_str
from propfile.properties import Properties, load_properties
from propfile.resolvers import environment_resolver

__all__ = [
    "EmptyKeyError",
    "InvalidPairError",
    "MutablePair",
    "Pair",
    "Properties",
    "PropertiesError",
    "PropertyNotFoundError",
    "environment_resolver",
    "load_properties",
    "to_property_str",
]
