"""
Route Source
Loads recorded routes (a JSON list of {latitude, longitude, timestamp} records)
from a local file or an HTTP(S) URL.
"""

import json
import time
from pathlib import Path

import requests

from config import ROUTE_FETCH_TIMEOUT, MAX_FETCH_RETRY_ATTEMPTS, FETCH_RETRY_DELAY
from core.route import Route


class RouteSourceError(Exception):
    """Route could not be read, downloaded or decoded."""


def is_url(source) -> bool:
    """Check whether source names an HTTP(S) resource."""
    return isinstance(source, str) and source.lower().startswith(('http://', 'https://'))


def read_route_file(path):
    """
    Read raw route records from a JSON file.

    Args:
        path: Path to JSON file

    Returns:
        List of raw record dictionaries

    Raises:
        RouteSourceError: if the file is missing, unreadable or not a JSON list
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise RouteSourceError(f"Route file not found: {path}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RouteSourceError(f"Route file is not valid JSON: {path} ({e})") from e
    except OSError as e:
        raise RouteSourceError(f"Could not read route file {path}: {e}") from e

    return _require_list(data, str(path))


def fetch_route_records(url):
    """
    Download raw route records from a URL, retrying transient failures.

    Args:
        url: HTTP(S) URL returning a JSON list

    Returns:
        List of raw record dictionaries

    Raises:
        RouteSourceError: on 404, invalid JSON, or failure after all retries
    """
    last_error = None

    for attempt in range(MAX_FETCH_RETRY_ATTEMPTS):
        try:
            response = requests.get(url, timeout=ROUTE_FETCH_TIMEOUT)
            response.raise_for_status()
            data = response.json()
            print(f"✓ Route downloaded from {url}")
            return _require_list(data, url)

        except requests.exceptions.HTTPError as e:
            # 404 - route doesn't exist, no point retrying
            status = e.response.status_code if e.response is not None else None
            if status == 404:
                raise RouteSourceError(f"Route not found (404): {url}") from e
            last_error = e
            print(f"  Attempt {attempt + 1}/{MAX_FETCH_RETRY_ATTEMPTS} failed: HTTP {status}")

        except ValueError as e:
            # requests raises a ValueError subclass for undecodable bodies
            raise RouteSourceError(f"Route response is not valid JSON: {url} ({e})") from e

        except requests.exceptions.RequestException as e:
            # Timeouts, connection errors - retry
            last_error = e
            print(f"  Attempt {attempt + 1}/{MAX_FETCH_RETRY_ATTEMPTS} failed: {e}")

        if attempt < MAX_FETCH_RETRY_ATTEMPTS - 1:
            print(f"  Retrying in {FETCH_RETRY_DELAY} seconds...")
            time.sleep(FETCH_RETRY_DELAY)

    raise RouteSourceError(f"Could not download route from {url}: {last_error}")


def load_route(source) -> Route:
    """
    Load and validate a route from a file path or URL.

    Args:
        source: Filesystem path or http(s):// URL

    Returns:
        Validated Route

    Raises:
        RouteSourceError: if the records cannot be obtained
        MalformedWaypoint: if any record is invalid
    """
    if is_url(source):
        records = fetch_route_records(source)
    else:
        records = read_route_file(source)

    return Route.from_records(records)


def _require_list(data, origin):
    if not isinstance(data, list):
        raise RouteSourceError(f"Expected a JSON list of waypoints from {origin}, got {type(data).__name__}")
    return data
