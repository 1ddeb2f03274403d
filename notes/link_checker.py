# notes/link_checker.py

import logging
from typing import Callable, Dict, Optional
from urllib.parse import urlparse

import requests
from django.conf import settings

from .exceptions import ReferenceCheckError

logger = logging.getLogger(__name__)

USER_AGENT = 'DjangoNotes-LinkChecker/1.0'


def get_timeout() -> int:
    return getattr(settings, 'NOTES_LINK_CHECK_TIMEOUT', 10)


def fetch_status(url: str, session: Optional[requests.Session] = None, timeout: Optional[int] = None) -> Optional[int]:
    """
    Returns the HTTP status code for a URL, or None if it could not be reached.

    Tries HEAD first; some documentation hosts answer 405 to HEAD, so GET is
    used as a fallback.
    """
    if urlparse(url).scheme not in ('http', 'https'):
        raise ReferenceCheckError(f"Unsupported URL scheme: {url}")

    http = session or requests
    timeout = timeout or get_timeout()
    headers = {'User-Agent': USER_AGENT}

    try:
        response = http.head(url, allow_redirects=True, timeout=timeout, headers=headers)
        if response.status_code in (405, 501):
            response = http.get(url, allow_redirects=True, timeout=timeout, headers=headers, stream=True)
            response.close()
        return response.status_code
    except requests.RequestException as e:
        logger.warning(f"[LINKCHECK] {url} unreachable: {e}")
        return None


def check_reference(reference, session: Optional[requests.Session] = None, timeout: Optional[int] = None) -> Optional[int]:
    """Check one Reference and store the outcome on it."""
    status = fetch_status(reference.url, session=session, timeout=timeout)
    reference.mark_checked(status)
    logger.info(f"[LINKCHECK] {reference.url} -> {status if status is not None else 'unreachable'}")
    return status


def check_references(references, timeout: Optional[int] = None, callback: Optional[Callable] = None) -> Dict[str, int]:
    """
    Check every reference in the iterable over one shared session.

    Args:
        references: Iterable of Reference instances
        timeout: Per-request timeout in seconds (defaults to NOTES_LINK_CHECK_TIMEOUT)
        callback: Optional callable(reference, status) invoked after each check

    Returns:
        Dict with 'checked', 'ok' and 'broken' counts
    """
    summary = {'checked': 0, 'ok': 0, 'broken': 0}

    with requests.Session() as session:
        for reference in references:
            try:
                status = check_reference(reference, session=session, timeout=timeout)
            except ReferenceCheckError as e:
                logger.warning(f"[LINKCHECK] Skipping reference {reference.pk}: {e}")
                reference.mark_checked(None)
                status = None

            summary['checked'] += 1
            if reference.is_broken:
                summary['broken'] += 1
            else:
                summary['ok'] += 1

            if callback is not None:
                callback(reference, status)

    return summary
