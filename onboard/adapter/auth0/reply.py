"""Reading Auth0 response bodies."""

from collections.abc import Iterator
from contextlib import contextmanager

import httpx
import logfire

from onboard.adapter.error import ProviderError


@contextmanager
def reading_reply(response: httpx.Response, what: str) -> Iterator[None]:
    """Turn a successful response with an unusable body into a ProviderError.

    Wrap every ``response.json()`` and field access on a 2xx reply so that
    missing keys, non-JSON bodies and unexpected shapes surface the same way
    as any other provider failure.

    Args:
        response: Provider response being read
        what: Short name of the call, for the error message

    Raises:
        ProviderError: If reading the body fails
    """
    try:
        yield
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        # ValueError covers JSONDecodeError and pydantic's ValidationError
        logfire.error(
            "Unexpected Auth0 reply",
            call=what,
            status_code=response.status_code,
            error=repr(e),
        )
        raise ProviderError(
            f"Unexpected {what} reply: {e!r}", status_code=response.status_code
        ) from e
