"""
Web retrieval helpers shared by the court sources and the bulletin pipeline.
"""

from typing import Dict, Optional

import requests

from bailx.config import Config
from bailx.log import get_logger
from bailx.model import FetchError

logger = get_logger(__name__)


def build_headers(cfg: Config, accept: Optional[str] = None) -> Dict[str, str]:
    """
    Build request headers with a browser-like User-Agent.

    Args:
        cfg: Configuration
        accept: Accept header, defaults to HTML

    Returns:
        Request headers
    """
    return {
        "User-Agent": cfg.http.user_agent,
        "Accept": accept or cfg.http.accept_html,
    }


def _check_status(response: requests.Response, url: str) -> None:
    if not 200 <= response.status_code < 300:
        raise FetchError(f"HTTP error! status: {response.status_code} for {url}")


def fetch_text(url: str, cfg: Config, timeout: float, params: Optional[Dict[str, str]] = None,
               accept: Optional[str] = None) -> str:
    """
    Fetch a URL and return the decoded body.

    Args:
        url: URL to fetch
        cfg: Configuration
        timeout: Request timeout in seconds
        params: Optional query parameters
        accept: Optional Accept header

    Returns:
        Response body as text

    Raises:
        FetchError: On network failure, timeout or a non-success status
    """
    logger.debug(f"GET {url} params={params}")
    try:
        response = requests.get(url, headers=build_headers(cfg, accept), params=params, timeout=timeout)
    except requests.exceptions.Timeout as e:
        raise FetchError(f"Timeout fetching {url}: {e}")
    except requests.exceptions.RequestException as e:
        raise FetchError(f"Failed to fetch {url}: {e}")

    _check_status(response, url)
    return response.text


def download_bulletin(url: str, cfg: Config) -> bytes:
    """
    Download a bulletin document, enforcing the configured size cap.

    Args:
        url: Document URL
        cfg: Configuration

    Returns:
        Raw document bytes

    Raises:
        FetchError: On network failure, a non-success status or an oversized body
    """
    max_bytes = cfg.bulletin.max_document_bytes
    logger.info(f"Downloading bulletin {url}")

    try:
        response = requests.get(
            url,
            headers=build_headers(cfg, "application/pdf,text/plain,text/html,*/*"),
            timeout=cfg.http.document_timeout,
            stream=True,
        )
        _check_status(response, url)

        content_length = response.headers.get("Content-Length")
        if content_length and content_length.isdigit() and int(content_length) > max_bytes:
            raise FetchError(f"Document too large: {content_length} bytes (max {max_bytes})")

        chunks = []
        size = 0
        for chunk in response.iter_content(chunk_size=8192):
            if not chunk:
                continue
            size += len(chunk)
            if size > max_bytes:
                raise FetchError(f"Document too large: more than {max_bytes} bytes")
            chunks.append(chunk)
    except requests.exceptions.RequestException as e:
        raise FetchError(f"Failed to download {url}: {e}")

    logger.info(f"Downloaded {size} bytes from {url}")
    return b"".join(chunks)
