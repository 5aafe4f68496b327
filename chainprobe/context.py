"""
Relational Context

Per-invocation cache over the host's entity collections.

- Each collection is fetched from the host at most once (first access)
- Joins scan the child collection for key equality; results are cached per
  (relation, parent key), so repeated access never rescans
- Entities never point back at the context; relationships are read
  through the context with the parent entity as argument

A context belongs to one invocation and one thread. Discarding it drops
every entity it produced.
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple, Type

from chainprobe.config import DEFAULT_CONFIG, SdkConfig
from chainprobe.entity import Entity
from chainprobe.host.base import Host
from chainprobe.host.bridge import ByteBufferBridge
from chainprobe.values.generic import Value


class BlockchainCtx:
    """Base for chain-specific contexts."""

    def __init__(self, host: Host, config: Optional[SdkConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.bridge = ByteBufferBridge(host, self.config)
        self._logger = logging.getLogger(self.__class__.__name__)

        self._collections: Dict[str, Tuple[Any, ...]] = {}
        self._joins: Dict[Tuple[str, Any], Tuple[Any, ...]] = {}
        self._argument_values: Dict[int, Value] = {}

    # =========================================================================
    # Collections
    # =========================================================================

    def _collection(self, kind: str, entity_type: Type[Entity]) -> Tuple[Any, ...]:
        cached = self._collections.get(kind)
        if cached is not None:
            return cached

        data = self.bridge.fetch_collection(kind)
        try:
            entities = tuple(entity_type.decode_all(data))
        except Exception as e:
            self._logger.warning(f"Failed to decode {kind} ({len(data)} bytes): {e}")
            raise

        self._collections[kind] = entities
        self._logger.debug(f"Loaded {len(entities)} {kind}")
        return entities

    def _first(self, kind: str, entity_type: Type[Entity]) -> Optional[Any]:
        entities = self._collection(kind, entity_type)
        return entities[0] if entities else None

    def is_loaded(self, kind: str) -> bool:
        return kind in self._collections

    # =========================================================================
    # Joins
    # =========================================================================

    def _join(
        self,
        relation: str,
        parent_key: Any,
        kind: str,
        entity_type: Type[Entity],
        child_key: Callable[[Any], Any],
    ) -> Tuple[Any, ...]:
        cache_key = (relation, parent_key)
        cached = self._joins.get(cache_key)
        if cached is not None:
            return cached

        children = tuple(
            child for child in self._collection(kind, entity_type)
            if child_key(child) == parent_key
        )
        self._joins[cache_key] = children
        self._logger.debug(f"Joined {relation}[{parent_key!r}]: {len(children)} rows")
        return children

    # =========================================================================
    # Argument Values
    # =========================================================================

    def _argument_value(self, seq: int) -> Value:
        cached = self._argument_values.get(seq)
        if cached is None:
            data = self.bridge.fetch_argument_value(seq)
            cached = Value.from_bytes(data, self.config.strict_value_maps)
            self._argument_values[seq] = cached
        return cached

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def stats(self) -> Dict[str, Any]:
        return {
            "collections": {kind: len(rows) for kind, rows in self._collections.items()},
            "joins_cached": len(self._joins),
            "argument_values_cached": len(self._argument_values),
        }
