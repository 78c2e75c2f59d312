"""Primary key shapes for persisted entities

Every entity class declares a KEY_SCHEMA naming its hash key attribute and,
for composite keys, its range key attribute. An entity instance maps itself
to a SimpleKey or CompositeKey through its key() method.
"""
from collections import namedtuple


class KeySchema(namedtuple("KeySchema", ["hash_key", "range_key"])):
    """Attribute names of a table's (or index's) key"""

    __slots__ = ()

    def __new__(cls, hash_key: str, range_key: str = None):
        return super().__new__(cls, hash_key, range_key)

    @property
    def is_composite(self) -> bool:
        return self.range_key is not None


class SimpleKey(namedtuple("SimpleKey", ["hash_value"])):
    """Key of an entity identified by its hash key alone"""

    __slots__ = ()


class CompositeKey(namedtuple("CompositeKey", ["hash_value", "range_value"])):
    """Key of an entity identified by (hash key, range key)"""

    __slots__ = ()


class SecondaryIndex(namedtuple("SecondaryIndex", ["name", "hash_key", "range_key"])):
    """Global secondary index with its own key definition"""

    __slots__ = ()

    @property
    def key_schema(self) -> KeySchema:
        return KeySchema(self.hash_key, self.range_key)
