"""
Recently generated question texts per topic.

Best-effort only: the in-memory store lives as long as the process, and the
Redis store is shared between instances but swallows its own outages. Nothing
relies on history for correctness; it just makes repeats less likely.
"""
from __future__ import annotations

import threading
from collections import OrderedDict, deque
from typing import Deque, List, Optional

import redis
import structlog

logger = structlog.get_logger()


class QuestionHistory:
    """Bounded in-memory history: FIFO per topic, LRU across topics"""

    def __init__(self, limit: int = 10, max_topics: int = 500):
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self.limit = limit
        self.max_topics = max_topics
        self._topics: "OrderedDict[str, Deque[str]]" = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def _key(topic: str) -> str:
        return topic.strip().lower()

    def record(self, topic: str, question_text: str) -> None:
        key = self._key(topic)
        with self._lock:
            entries = self._topics.get(key)
            if entries is None:
                entries = deque(maxlen=self.limit)
                self._topics[key] = entries
            self._topics.move_to_end(key)
            entries.append(question_text)
            while len(self._topics) > self.max_topics:
                self._topics.popitem(last=False)

    def recent(self, topic: str, n: Optional[int] = None) -> List[str]:
        """Oldest first; with ``n`` only the last n entries."""
        with self._lock:
            entries = list(self._topics.get(self._key(topic), ()))
        if n is not None:
            return entries[-n:] if n > 0 else []
        return entries

    def clear(self, topic: Optional[str] = None) -> None:
        with self._lock:
            if topic is None:
                self._topics.clear()
            else:
                self._topics.pop(self._key(topic), None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._topics)


class RedisQuestionHistory(QuestionHistory):
    """History shared across instances through a Redis list per topic"""

    def __init__(self, redis_url: str, limit: int = 10, expire: int = 86400):
        super().__init__(limit=limit)
        self.expire = expire
        self.redis_client = redis.from_url(redis_url, decode_responses=True)

    def _redis_key(self, topic: str) -> str:
        return f"mindspark:history:{self._key(topic)}"

    def record(self, topic: str, question_text: str) -> None:
        key = self._redis_key(topic)
        try:
            pipe = self.redis_client.pipeline()
            pipe.rpush(key, question_text)
            pipe.ltrim(key, -self.limit, -1)
            pipe.expire(key, self.expire)
            pipe.execute()
        except redis.RedisError as e:
            logger.warning(f"History record failed for {key}: {e}")

    def recent(self, topic: str, n: Optional[int] = None) -> List[str]:
        key = self._redis_key(topic)
        try:
            entries = self.redis_client.lrange(key, 0, -1)
        except redis.RedisError as e:
            logger.warning(f"History read failed for {key}: {e}")
            return []
        if n is not None:
            return entries[-n:] if n > 0 else []
        return entries

    def clear(self, topic: Optional[str] = None) -> None:
        try:
            if topic is None:
                keys = self.redis_client.keys("mindspark:history:*")
                if keys:
                    self.redis_client.delete(*keys)
            else:
                self.redis_client.delete(self._redis_key(topic))
        except redis.RedisError as e:
            logger.warning(f"History clear failed: {e}")

    def __len__(self) -> int:
        try:
            return sum(1 for _ in self.redis_client.scan_iter(match="mindspark:history:*"))
        except redis.RedisError as e:
            logger.warning(f"History size lookup failed: {e}")
            return 0

    def ping(self) -> bool:
        try:
            return bool(self.redis_client.ping())
        except redis.RedisError:
            return False


def build_history(limit: int = 10, max_topics: int = 500, redis_url: Optional[str] = None) -> QuestionHistory:
    """Redis-backed history when a URL is given and reachable, else in-memory."""
    if redis_url:
        try:
            store = RedisQuestionHistory(redis_url, limit=limit)
        except (ValueError, redis.RedisError) as e:
            logger.warning(f"Redis URL rejected ({e}), using in-memory question history")
        else:
            if store.ping():
                logger.info("Question history using Redis")
                return store
            logger.warning("Redis not available, using in-memory question history")
    return QuestionHistory(limit=limit, max_topics=max_topics)
