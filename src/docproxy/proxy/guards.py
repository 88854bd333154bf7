"""Request guards applied before traffic is forwarded."""

import re


def is_credentialed_self_reference(url: str, host: str) -> bool:
    """
    Detect a url embedding a credentialed http(s) reference to its own host.

    Matches an ``http(s)://...@host`` reference that follows a "/" in the
    url, such as ``https://host/redirect/https://user:pw@host/``. The host
    is matched literally and must end at a port, path, query, fragment or
    the end of the url, so ``host.evil.com`` does not match ``host``.

    Examples:
        >>> is_credentialed_self_reference("https://a.com/x/https://u@a.com/", "a.com")
        True
        >>> is_credentialed_self_reference("https://a.com/x/https://u@a.com.evil/", "a.com")
        False
    """
    if not host:
        return False
    pattern = r"/https?://[^\s]*@" + re.escape(host) + r"(?=[:/?#]|\Z)"
    return re.search(pattern, url, re.IGNORECASE) is not None
