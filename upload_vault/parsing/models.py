from dataclasses import dataclass


@dataclass(frozen=True)
class Topic:
    """One ``name(score)`` entry of the topics column."""

    topic: str
    relevance_score: str


@dataclass(frozen=True)
class TickerSentiment:
    """One ``ticker(label)`` entry of the ticker_sentiment column.

    The source data carries no scores; both score fields stay empty.
    """

    ticker: str
    sentiment_label: str
    relevance_score: str = ""
    sentiment_score: str = ""
