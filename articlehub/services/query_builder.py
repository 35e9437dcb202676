from dataclasses import dataclass, field

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 15
MAX_LIMIT = 100
# skip is sent as a signed 64-bit BSON integer
MAX_SKIP = 2 ** 63 - 1


@dataclass(frozen=True)
class ArticleQuery:
    filter: dict = field(default_factory=dict)
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def _positive_int(value, default: int) -> int:
    """Parse a query-string number; anything unusable falls back to the default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        return default
    return max(number, 1)


def build_article_query(args, default_limit: int = DEFAULT_LIMIT, max_limit: int = MAX_LIMIT) -> ArticleQuery:
    """
    Translates list request parameters (type, includeAll, page, limit) into a
    Mongo filter plus pagination.

    An explicit type always wins; includeAll only lifts the default
    restriction to original articles when it is the literal string "true".
    """
    article_type = args.get('type')
    include_all = args.get('includeAll')

    if article_type:
        query_filter = {'type': article_type}
    elif include_all == 'true':
        query_filter = {}
    else:
        query_filter = {'type': 'original'}

    page = _positive_int(args.get('page'), DEFAULT_PAGE)
    limit = min(_positive_int(args.get('limit'), default_limit), max_limit)
    page = min(page, MAX_SKIP // limit + 1)

    return ArticleQuery(filter=query_filter, page=page, limit=limit)
