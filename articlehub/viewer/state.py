"""Explicit state machine for the article feed shown by the viewer.

Idle -> Loading -> Loaded | Failed, and Loaded/Failed -> Loading on retry.
Transitions are pure functions returning a new state.
"""
import logging
from typing import List, Literal, Union

from pydantic import BaseModel, ConfigDict

from ..models.feed import ArticlePair, FeedStats
from ..services.pairing import feed_stats, pair_articles
from .client import BackendUnavailableError, FeedError, FeedHTTPError

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch articles."
BACKEND_DOWN_HINT = "Backend is not running. Start it with: python run.py"


class InvalidTransitionError(Exception):
    def __init__(self, state, transition: str):
        self.state = state
        self.transition = transition
        super().__init__(f"Cannot {transition} from {state.status} state")


class Idle(BaseModel):
    status: Literal["idle"] = "idle"
    model_config = ConfigDict(frozen=True)


class Loading(BaseModel):
    status: Literal["loading"] = "loading"
    model_config = ConfigDict(frozen=True)


class Loaded(BaseModel):
    status: Literal["loaded"] = "loaded"
    pairs: List[ArticlePair]
    stats: FeedStats
    model_config = ConfigDict(frozen=True)

    @property
    def is_empty(self) -> bool:
        return not self.pairs


class Failed(BaseModel):
    status: Literal["failed"] = "failed"
    message: str
    model_config = ConfigDict(frozen=True)


FeedState = Union[Idle, Loading, Loaded, Failed]


def start_loading(state: FeedState) -> Loading:
    if isinstance(state, Loading):
        raise InvalidTransitionError(state, "start loading")
    return Loading()


def load_succeeded(state: FeedState, pairs: List[ArticlePair]) -> Loaded:
    if not isinstance(state, Loading):
        raise InvalidTransitionError(state, "finish loading")
    return Loaded(pairs=pairs, stats=feed_stats(pairs))


def load_failed(state: FeedState, message: str) -> Failed:
    if not isinstance(state, Loading):
        raise InvalidTransitionError(state, "fail loading")
    return Failed(message=message)


def describe_fetch_error(error: FeedError) -> str:
    if isinstance(error, BackendUnavailableError):
        return f"{FETCH_FAILED} {BACKEND_DOWN_HINT}"
    if isinstance(error, FeedHTTPError):
        return f"{FETCH_FAILED} Server error: {error.status_code}"
    return f"{FETCH_FAILED} {error}"


def load_feed(client, state: FeedState = Idle(), **fetch_options) -> FeedState:
    """Runs one fetch through the state machine and returns the settled state."""
    state = start_loading(state)
    try:
        feed = client.fetch_articles(**fetch_options)
    except FeedError as e:
        logger.error(f"Error fetching articles: {e}")
        return load_failed(state, describe_fetch_error(e))
    return load_succeeded(state, pair_articles(feed.data))
