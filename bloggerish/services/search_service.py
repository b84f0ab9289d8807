from bloggerish.models import Post
from bloggerish.store import BlogStore
from typing import List
import logging

logger = logging.getLogger(__name__)

class SearchService:
    def keyword_search(
        self,
        query: str,
        store: BlogStore,
        limit: int = 20
    ) -> List[Post]:
        """Simple keyword search on title and content"""
        query = (query or "").strip()
        if not query:
            return []

        results = store.search_posts(query)[:limit]
        logger.debug(f"Search for {query!r} matched {len(results)} post(s)")
        return results
