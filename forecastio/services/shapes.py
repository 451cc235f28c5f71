"""Turn raw Forecast.io payloads into weather cards."""

from typing import Any, List, Optional, Protocol

from forecastio.exceptions import ShapeError
from forecastio.schemas.forecast import WeatherCard
from forecastio.services.variants import ResponseShape


class CardRenderer(Protocol):
    """Renders weather cards into markup, e.g. an HTML template."""

    def render(self, cards: List[WeatherCard]) -> str:
        ...


def _current_card(payload: dict) -> WeatherCard:
    currently = payload["currently"]
    return WeatherCard(
        icon=currently["icon"],
        temperature=currently["temperature"],
        summary=currently["summary"],
        text=currently["summary"],
    )


def _daily_card(payload: dict, index: int, label: str) -> WeatherCard:
    day = payload["daily"]["data"][index]
    low = day["temperatureMin"]
    high = day["temperatureMax"]
    return WeatherCard(
        icon=day["icon"],
        summary=day["summary"],
        low=low,
        high=high,
        text=f"{label}, low of {low} and high of {high}. {day['summary']}",
        weather=payload,
    )


def shape_payload(
    shape: ResponseShape,
    payload: Any,
    renderer: Optional[CardRenderer] = None,
) -> Any:
    """
    Shape a successful payload for the caller.

    Args:
        shape: Response shape of the variant
        payload: Parsed JSON (or raw text for callback responses)
        renderer: Optional renderer used to fill each card's ``view``

    Returns:
        The payload unchanged for ``RAW``, otherwise a one-card list

    Raises:
        ShapeError: If the payload lacks the fields the shape needs or the
            renderer fails
    """
    if shape is ResponseShape.RAW:
        return payload

    try:
        if shape is ResponseShape.CURRENT:
            card = _current_card(payload)
        elif shape is ResponseShape.TODAY:
            card = _daily_card(payload, 0, "Today")
        else:
            card = _daily_card(payload, 1, "Tomorrow")
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise ShapeError(f"There was an error attempting to build the response: {e!r}")

    cards = [card]
    if renderer is not None:
        try:
            card.view = renderer.render(cards)
        except Exception as e:
            raise ShapeError(f"There was an error rendering the weather card: {e!r}")
    return cards
