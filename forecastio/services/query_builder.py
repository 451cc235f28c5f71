"""Build Forecast.io request URLs from validated inputs."""

from typing import List, Optional, Tuple
from urllib.parse import quote

from forecastio.schemas.forecast import ForecastOptions


def _option_pairs(options: ForecastOptions) -> List[Tuple[str, str]]:
    # Emission order is fixed regardless of how the caller built the options
    pairs = []
    if options.callback:
        pairs.append(("callback", options.callback))
    if options.units:
        pairs.append(("units", options.units))
    if options.exclude:
        pairs.append(("exclude", ",".join(options.exclude)))
    if options.lang:
        pairs.append(("lang", options.lang))
    if options.extend:
        pairs.append(("extend", options.extend))
    return pairs


def build_query_string(options: Optional[ForecastOptions]) -> str:
    """
    Turn an options bag into a query string.

    Fields are emitted as ``callback``, ``units``, ``exclude``, ``lang``
    then ``extend``, skipping empty ones, and joined with ``&``.

    Returns:
        ``"?..."`` or an empty string when nothing is set
    """
    if options is None:
        return ""

    pairs = _option_pairs(options)
    if not pairs:
        return ""

    return "?" + "&".join(
        f"{key}={quote(value, safe=',')}" for key, value in pairs
    )


def build_request_url(
    base_url: str,
    api_key: str,
    lat: str,
    lng: str,
    epoch: Optional[int] = None,
    query_string: str = "",
) -> str:
    """
    Build ``<base>/<apiKey>/<lat>,<lng>[,<epoch>][<query>]``.

    The API key is percent-encoded as a single path segment so it cannot
    add path segments, a query or a fragment to the URL.
    """
    location = f"{lat},{lng}"
    if epoch is not None:
        location = f"{location},{epoch}"
    return f"{base_url.rstrip('/')}/{quote(api_key, safe='')}/{location}{query_string}"
