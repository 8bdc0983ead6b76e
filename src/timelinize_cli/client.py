# -*- coding: utf-8 -*-
"""
Thin HTTP binding for the Timelinize server API.

Every method builds a URL and/or JSON body, issues exactly one request and
returns the raw ``requests.Response``. Status codes and JSON decoding are the
caller's business.
"""

from __future__ import annotations
import json
import sys
import requests
from typing import Optional, Dict, Any, List

# ── Constants ────────────────────────────────────────────────────────────────
DEFAULT_BASE_URL = "http://127.0.0.1:12002"

# The import endpoint is normally driven by the bundled web UI, so mimic it.
IMPORT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (X11; Linux x86_64; rv:128.0) Gecko/20100101 Firefox/128.0",
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "Content-Type": "application/json",
    "Connection": "keep-alive",
    "Sec-Fetch-Dest": "empty",
    "Sec-Fetch-Mode": "cors",
    "Sec-Fetch-Site": "same-origin",
}


def eprint(msg: str, verbose: bool=False):
    if verbose:
        print(msg, file=sys.stderr)


def encode_query(params: Optional[Dict[str,Any]]) -> Dict[str,Any]:
    """Flattens a parameter map into something ``requests`` encodes sanely.

    Booleans become ``true``/``false``, lists of scalars stay lists (repeated
    keys), and anything nested is sent as compact JSON. ``None`` is dropped.
    """
    out: Dict[str,Any] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            out[key] = "true" if value else "false"
        elif isinstance(value, dict):
            out[key] = json.dumps(value, separators=(",",":"))
        elif isinstance(value, (list, tuple)):
            if any(isinstance(v, (dict, list, tuple)) for v in value):
                out[key] = json.dumps(list(value), separators=(",",":"))
            else:
                out[key] = ["true" if v is True else "false" if v is False else v for v in value]
        else:
            out[key] = value
    return out


# ── HTTP ─────────────────────────────────────────────────────────────────────
class TimelinizeClient:
    def __init__(self, base_url: str, repo_id: str, verbose: bool=False):
        self.base_url = base_url
        self.repo_id = repo_id
        self.verbose = verbose
        self.session = requests.Session()

    def _log(self, msg: str):
        eprint(f"[API] {msg}", self.verbose)

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url.rstrip('/')}/api/{endpoint.lstrip('/')}"

    def get(self, endpoint: str, params: Optional[Dict[str,Any]]=None) -> requests.Response:
        url = self._url(endpoint)
        query = encode_query(params)
        self._log(f"GET {url} params={query}")
        return self.session.get(url, params=query or None)

    def post_json(self, endpoint: str, body: Dict[str,Any], headers: Optional[Dict[str,str]]=None) -> requests.Response:
        url = self._url(endpoint)
        self._log(f"POST {url} body={json.dumps(body)}")
        return self.session.post(url, json=body, headers=headers)

    # ── Repositories ─────────────────────────────────────────────────────────
    def open_repositories(self) -> requests.Response:
        return self.get("open-repositories")

    def file_selector_roots(self) -> requests.Response:
        return self.get("file-selector-roots")

    def open_repository(self, repo_path: str, create: bool=False) -> requests.Response:
        """Opens the timeline at ``repo_path``, creating it first if asked."""
        return self.get("open-repository", {"repo_path": repo_path, "create": create})

    # ── Search ───────────────────────────────────────────────────────────────
    def search_items(self, params: Dict[str,Any]) -> requests.Response:
        return self.get("search-items", {**params, "repo": self.repo_id})

    def search_entities(self, params: Dict[str,Any]) -> requests.Response:
        return self.get("search-entities", params)

    # ── Metadata ─────────────────────────────────────────────────────────────
    def data_sources(self) -> requests.Response:
        return self.get("data-sources", {"repo": self.repo_id})

    def charts(self, name: str) -> requests.Response:
        return self.get("charts", {"name": name, "repo_id": self.repo_id})

    # ── Import ───────────────────────────────────────────────────────────────
    def import_files(self, data_source_name: str, filenames: List[str],
                     processing_options: Dict[str,Any]) -> requests.Response:
        """
        Queues an import job for ``filenames`` with the given data source.

        The files are referenced by path; the server reads them itself.
        ``processing_options`` is forwarded untouched.
        """
        body = {
            "repo": self.repo_id,
            "job": {
                "plan": {
                    "files": [
                        {"data_source_name": data_source_name, "filenames": list(filenames)},
                    ],
                },
                "processing_options": processing_options,
            },
        }
        headers = dict(IMPORT_HEADERS)
        headers["Origin"] = self.base_url.rstrip("/")
        headers["Referer"] = self.base_url.rstrip("/") + "/"
        return self.post_json("import", body, headers=headers)


def new_client(base_url: str, repo_id: str, verbose: bool=False) -> TimelinizeClient:
    return TimelinizeClient(base_url, repo_id, verbose=verbose)
