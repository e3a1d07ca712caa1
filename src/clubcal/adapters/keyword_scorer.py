"""Local keyword relevance scorer."""

from clubcal.core.events import Event

TITLE_WEIGHT = 3
DESCRIPTION_WEIGHT = 2
CATEGORY_WEIGHT = 2
TAG_WEIGHT = 1
LOCATION_WEIGHT = 1


class KeywordScorer:
    """
    Weighted keyword relevance, computed locally.

    Implements SearchScorer protocol. Each query term scores points for every
    field it appears in; events scoring zero are dropped and the rest are
    ranked by score, ties in input order.
    """

    def score(self, event: Event, query: str) -> int:
        total = 0
        for term in query.lower().split():
            if term in event.title.lower():
                total += TITLE_WEIGHT
            if term in event.description.lower():
                total += DESCRIPTION_WEIGHT
            if any(term in c.value.lower() for c in event.categories):
                total += CATEGORY_WEIGHT
            if any(term in tag.lower() for tag in event.tags):
                total += TAG_WEIGHT
            if term in event.location.lower():
                total += LOCATION_WEIGHT
        return total

    def __call__(self, events: list[Event], query: str) -> list[Event]:
        scored = [(self.score(e, query), e) for e in events]
        ranked = sorted((s for s in scored if s[0] > 0), key=lambda s: s[0], reverse=True)
        return [e for _, e in ranked]
