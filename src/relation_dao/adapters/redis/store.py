"""Redis DAO adapter.

Implements the ``DAO`` protocol over plain Redis:
- **Strings** hold one JSON document per entity at ``{prefix}{collection}:doc:{id}``
- A **sorted set** at ``{prefix}{collection}:__ids__`` records natural
  (first-insert) order, scored by the counter at ``{prefix}{collection}:__seq__``

Documents live under their own ``doc:`` segment so no id can address the
order set or the counter.

Predicates are evaluated in process: ``select`` reads ids in natural order,
MGETs the documents in batches and runs them through ``apply_query``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

import orjson
import structlog
from redis.asyncio import Redis

from relation_dao.domain.models import Entity
from relation_dao.domain.query import apply_query

if TYPE_CHECKING:
    from relation_dao.domain.models import EntityId
    from relation_dao.domain.ordering import OrderSpec
    from relation_dao.domain.predicates import Predicate
    from relation_dao.domain.sinks import Sink
    from relation_dao.settings import RedisSettings

E = TypeVar("E", bound=Entity)

log = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _entity_to_json_bytes(obj: Entity) -> bytes:
    """Serialize an entity to JSON bytes."""
    return orjson.dumps(obj.model_dump(mode="json"))


def _deserialize_entity(of: type[E], raw_json: bytes | str) -> E:
    """Deserialize a JSON blob into an instance of ``of``."""
    raw_bytes = raw_json.encode() if isinstance(raw_json, str) else raw_json
    # strict=False allows coercion from JSON string types (UUID, datetime)
    return of.model_validate(orjson.loads(raw_bytes), strict=False)


# ---------------------------------------------------------------------------
# RedisDAO
# ---------------------------------------------------------------------------


class RedisDAO(Generic[E]):
    """DAO implementation backed by Redis.

    Satisfies the ``relation_dao.ports.dao.DAO`` protocol.
    """

    def __init__(
        self,
        client: Redis,
        settings: RedisSettings,
        collection: str,
        of: type[E],
    ) -> None:
        self._client = client
        self._settings = settings
        self.collection = collection
        self.of = of

    # -- lifecycle ----------------------------------------------------------

    @classmethod
    async def create(
        cls,
        settings: RedisSettings,
        collection: str,
        of: type[E],
    ) -> RedisDAO[E]:
        """Factory: create a connected DAO from settings."""
        client = Redis(
            host=settings.host,
            port=settings.port,
            db=settings.db,
            password=settings.password,
            decode_responses=False,
        )
        await client.ping()
        log.info("redis_dao_connected", collection=collection, host=settings.host)
        return cls(client=client, settings=settings, collection=collection, of=of)

    async def close(self) -> None:
        """Release the Redis connection."""
        await self._client.aclose()
        log.info("redis_connection_closed", collection=self.collection)

    # -- keys ---------------------------------------------------------------

    def _doc_key(self, id: EntityId) -> str:  # noqa: A002
        return f"{self._settings.key_prefix}{self.collection}:doc:{id}"

    @property
    def _ids_key(self) -> str:
        return f"{self._settings.key_prefix}{self.collection}:__ids__"

    @property
    def _seq_key(self) -> str:
        return f"{self._settings.key_prefix}{self.collection}:__seq__"

    # -- write operations ---------------------------------------------------

    async def put(self, obj: E) -> E:
        """Insert or replace ``obj`` by id. Returns the stored entity.

        A replaced entity keeps its original natural-order position (ZADD NX).
        """
        if not isinstance(obj, self.of):
            msg = f"{self.collection} stores {self.of.__name__}, got {type(obj).__name__}"
            raise TypeError(msg)

        id_str = str(obj.id)
        seq = await self._client.incr(self._seq_key)
        async with self._client.pipeline(transaction=True) as pipe:
            pipe.set(self._doc_key(id_str), _entity_to_json_bytes(obj))
            pipe.zadd(self._ids_key, {id_str: seq}, nx=True)
            await pipe.execute()

        log.debug("dao_put", dao=self.collection, id=id_str)
        return obj.model_copy(deep=True)

    async def remove(self, obj: E) -> E | None:
        """Remove ``obj`` by id. Returns the removed entity, or None if absent."""
        existing = await self.find(obj.id)
        if existing is None:
            return None

        id_str = str(obj.id)
        async with self._client.pipeline(transaction=True) as pipe:
            pipe.delete(self._doc_key(id_str))
            pipe.zrem(self._ids_key, id_str)
            await pipe.execute()

        log.debug("dao_removed", dao=self.collection, id=id_str)
        return existing

    # -- read operations ----------------------------------------------------

    async def find(self, id: EntityId) -> E | None:  # noqa: A002
        """Return the entity with ``id``, or None if absent."""
        raw = await self._client.get(self._doc_key(id))
        if raw is None:
            return None
        return _deserialize_entity(self.of, raw)

    async def _load_all(self) -> list[E]:
        """Load every document in natural order."""
        raw_ids: list[bytes] = await self._client.zrange(self._ids_key, 0, -1)
        ids = [raw.decode() if isinstance(raw, bytes) else str(raw) for raw in raw_ids]

        entities: list[E] = []
        batch_size = self._settings.mget_batch_size
        for start in range(0, len(ids), batch_size):
            batch = ids[start : start + batch_size]
            docs = await self._client.mget([self._doc_key(id_str) for id_str in batch])
            # A doc can vanish between ZRANGE and MGET under concurrent removal
            entities.extend(_deserialize_entity(self.of, doc) for doc in docs if doc is not None)
        return entities

    async def select(
        self,
        sink: Sink | None = None,
        skip: int | None = None,
        limit: int | None = None,
        order: OrderSpec | None = None,
        predicate: Predicate | None = None,
    ) -> Sink:
        """Feed matching entities into ``sink`` in natural (first-insert) order."""
        entities = await self._load_all()
        log.debug("dao_select", dao=self.collection, scanned=len(entities))
        return apply_query(entities, sink, skip, limit, order, predicate)
