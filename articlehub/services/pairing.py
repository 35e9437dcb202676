import logging
from typing import List, Sequence

from ..models.article import ArticleType
from ..models.feed import ArticlePair, ArticleView, FeedStats

logger = logging.getLogger(__name__)


def pair_articles(articles: Sequence[ArticleView]) -> List[ArticlePair]:
    """
    Groups a flat article list into (original, enhanced) display pairs.

    When the list contains originals, each one yields exactly one pair with
    the first updated article that references it, or no enhancement. Further
    updated versions of the same original are not surfaced. When the list
    holds only updated articles, each is shown against its populated
    original reference.
    """
    originals = [a for a in articles if a.type == ArticleType.ORIGINAL]
    updated = [a for a in articles if a.type == ArticleType.UPDATED]

    if originals:
        pairs = []
        for original in originals:
            enhanced = next((u for u in updated if u.reference_id == original.id), None)
            pairs.append(ArticlePair(original=original, enhanced=enhanced))
    elif updated:
        logger.info("Only enhanced articles found, pairing them with their referenced originals")
        pairs = [ArticlePair(original=u.resolved_original, enhanced=u) for u in updated]
    else:
        pairs = []

    logger.debug(f"Grouped {len(articles)} articles into {len(pairs)} pairs")
    return pairs


def feed_stats(pairs: Sequence[ArticlePair]) -> FeedStats:
    original_count = len(pairs)
    enhanced_count = sum(1 for pair in pairs if pair.enhanced is not None)
    return FeedStats(
        total_count=original_count + enhanced_count,
        original_count=original_count,
        enhanced_count=enhanced_count,
    )
