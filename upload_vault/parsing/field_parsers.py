"""Parsers for the two semi-structured columns of sentiment spreadsheets.

Both columns share one grammar::

    list  := token ("," token)*
    token := name "(" value ")"
    name  := one or more characters other than "(" and ")"
    value := one or more characters other than "(" and ")"

Whitespace around a token, its name and its value is ignored. Tokens that do
not match are dropped without error; parsing never fails.
"""

from upload_vault.parsing.models import TickerSentiment, Topic

_TOKEN_SEPARATOR = ","
_OPEN = "("
_CLOSE = ")"


def parse_topics(raw: object) -> list[Topic]:
    """``"AI(0.92), Crypto(0.88)"`` -> topics with their relevance scores."""
    return [Topic(topic=name, relevance_score=value) for name, value in tokenize(raw)]


def parse_ticker_sentiment(raw: object) -> list[TickerSentiment]:
    """``"BTC(Bullish), ETH(Neutral)"`` -> tickers with their sentiment labels."""
    return [
        TickerSentiment(ticker=name, sentiment_label=value)
        for name, value in tokenize(raw)
    ]


def tokenize(raw: object) -> list[tuple[str, str]]:
    """Split a cell into ``(name, value)`` pairs, keeping order and duplicates."""
    if raw is None:
        return []
    text = raw if isinstance(raw, str) else str(raw)
    if not text.strip():
        return []
    pairs: list[tuple[str, str]] = []
    for token in text.split(_TOKEN_SEPARATOR):
        pair = parse_token(token)
        if pair is not None:
            pairs.append(pair)
    return pairs


def parse_token(token: str) -> tuple[str, str] | None:
    """Return ``(name, value)`` for a well-formed token, otherwise None."""
    token = token.strip()
    if not token.endswith(_CLOSE):
        return None
    open_at = token.find(_OPEN)
    if open_at == -1:
        return None
    name = token[:open_at].strip()
    value = token[open_at + 1 : -1].strip()
    if not name or not value:
        return None
    if _has_paren(name) or _has_paren(value):
        return None
    return name, value


def _has_paren(part: str) -> bool:
    return _OPEN in part or _CLOSE in part
