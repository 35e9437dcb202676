"""Tests for grouping flat article lists into display pairs."""

from articlehub.models.feed import ArticleView, ResolvedReference
from articlehub.services.pairing import feed_stats, pair_articles

A_ID = "6760a0c2f1d2e3a4b5c6d701"
B_ID = "6760a0c2f1d2e3a4b5c6d702"
X_ID = "6760a0c2f1d2e3a4b5c6d7ff"


def _article(article_id, article_type="original", reference=None, title=None):
    return ArticleView.model_validate({
        "_id": article_id,
        "title": title or f"Article {article_id[-2:]}",
        "content": "body",
        "type": article_type,
        "originalArticleId": reference,
    })


def test_originals_paired_with_matching_enhancement() -> None:
    a, b = _article(A_ID), _article(B_ID)
    u1 = _article("6760a0c2f1d2e3a4b5c6d711", "updated", reference=A_ID)

    pairs = pair_articles([a, b, u1])

    assert [(p.original, p.enhanced) for p in pairs] == [(a, u1), (b, None)]


def test_populated_reference_matches_by_id() -> None:
    a = _article(A_ID)
    u1 = _article("6760a0c2f1d2e3a4b5c6d711", "updated", reference={"_id": A_ID, "title": "A", "url": None})

    pairs = pair_articles([u1, a])

    assert len(pairs) == 1
    assert pairs[0].original == a
    assert pairs[0].enhanced == u1


def test_first_matching_enhancement_wins() -> None:
    a = _article(A_ID)
    newest = _article("6760a0c2f1d2e3a4b5c6d712", "updated", reference=A_ID)
    older = _article("6760a0c2f1d2e3a4b5c6d711", "updated", reference=A_ID)

    pairs = pair_articles([newest, older, a])

    assert len(pairs) == 1
    assert pairs[0].enhanced.id == newest.id


def test_only_enhanced_articles_use_populated_original() -> None:
    u1 = _article("6760a0c2f1d2e3a4b5c6d711", "updated",
                  reference={"_id": X_ID, "title": "X", "url": "https://example.com/x"})

    pairs = pair_articles([u1])

    assert len(pairs) == 1
    assert isinstance(pairs[0].original, ResolvedReference)
    assert pairs[0].original.id == X_ID
    assert pairs[0].original.title == "X"
    assert pairs[0].enhanced == u1


def test_only_enhanced_articles_with_raw_reference_have_no_original() -> None:
    u1 = _article("6760a0c2f1d2e3a4b5c6d711", "updated", reference=X_ID)

    pairs = pair_articles([u1])

    assert pairs[0].original is None
    assert pairs[0].enhanced == u1


def test_empty_input_yields_no_pairs() -> None:
    assert pair_articles([]) == []


def test_pairs_follow_input_order_of_originals() -> None:
    b, a = _article(B_ID), _article(A_ID)
    assert [p.original.id for p in pair_articles([b, a])] == [B_ID, A_ID]


def test_feed_stats_counts_pairs_and_enhancements() -> None:
    a, b = _article(A_ID), _article(B_ID)
    u1 = _article("6760a0c2f1d2e3a4b5c6d711", "updated", reference=A_ID)

    stats = feed_stats(pair_articles([a, b, u1]))

    assert (stats.original_count, stats.enhanced_count, stats.total_count) == (2, 1, 3)
