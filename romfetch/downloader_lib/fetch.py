"""Network fetch helpers for romfetch."""
import os
import random
import time
from pathlib import Path

import requests
import urllib3

from ..utils.constants import CHUNK_SIZE, DEFAULT_TIMEOUT, USER_AGENTS

PAGE_ACCEPT = 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8'


def _get_random_user_agent() -> str:
    """Return a random user agent."""
    return random.choice(USER_AGENTS)


def silence_insecure_warnings(verify_ssl: bool):
    """Suppress urllib3's per-request warning when certificate checks are turned off."""
    if not verify_ssl:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)


def fetch_source_page(session: requests.Session, url: str, timeout: float = DEFAULT_TIMEOUT, verify: bool = True):
    """Fetch one source listing page. Raises on network errors and non-2xx responses."""
    headers = {
        'User-Agent': _get_random_user_agent(),
        'Accept': PAGE_ACCEPT,
    }
    response = session.get(url, headers=headers, verify=verify, timeout=timeout)
    response.raise_for_status()
    return response


def download_to_path(session: requests.Session, url: str, dest: Path, timeout: float = DEFAULT_TIMEOUT,
                     verify: bool = True, referer: str = None) -> int:
    """Stream `url` into `dest` and return the number of bytes written.

    `timeout` bounds the whole transfer, not just the wait for each chunk.
    The body goes to a `.part` file that replaces `dest` only on success, so a
    failed download never touches a file already at `dest`. An empty body
    counts as a failure.
    """
    headers = {
        'User-Agent': _get_random_user_agent(),
        'Accept': '*/*',
        'Connection': 'keep-alive',
    }
    if referer:
        headers['Referer'] = referer

    dest = Path(dest)
    part = dest.with_name(dest.name + '.part')
    deadline = time.monotonic() + timeout
    written = 0
    response = None
    try:
        response = session.get(url, headers=headers, verify=verify, allow_redirects=True,
                               stream=True, timeout=timeout)
        response.raise_for_status()
        with open(part, 'wb') as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if time.monotonic() > deadline:
                    raise requests.Timeout(f"Download exceeded {timeout}s")
                if chunk:
                    f.write(chunk)
                    written += len(chunk)
        if written == 0:
            raise OSError("Downloaded file is empty")
        os.replace(part, dest)
    except Exception:
        if part.exists():
            part.unlink()
        raise
    finally:
        close = getattr(response, 'close', None)
        if close:
            close()
    return written
