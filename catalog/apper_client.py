"""HTTP client for the Apper record service."""
from __future__ import annotations

import logging
import os
import random
import time
from typing import Any, Dict, Optional

import requests
from flask import current_app, has_app_context

DEFAULT_API_URL = "https://api.apper.io/v1"


class ApperClient:
    """Thin wrapper around the Apper records API.

    Every call returns the service envelope unchanged:
    ``{"success": bool, "data": ..., "message": str}``.  A ``success`` of
    ``False`` is a processing error reported by the service and is left for
    the caller to inspect; transport problems raise ``requests`` exceptions.

    Each call is a single attempt bounded by ``timeout``.  Retrying 429, 5xx
    and network errors with backoff is opt-in through ``max_retries``.
    """

    def __init__(
        self,
        project_id: str = "",
        public_key: str = "",
        base_url: str = DEFAULT_API_URL,
        timeout: int = 10,
        max_retries: int = 0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {public_key}",
                "X-Apper-Project-Id": project_id,
                "Accept": "application/json",
            }
        )

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        tries = 0
        while True:
            start = time.monotonic()
            try:
                r = self.session.post(url, json=payload, timeout=self.timeout)
            except requests.RequestException:  # network issue
                tries += 1
                if tries > self.max_retries:
                    raise
                time.sleep(min(2 ** tries, 30) + random.random())
                continue
            latency = (time.monotonic() - start) * 1000
            logging.info("Apper POST %s %s %.1fms", url, r.status_code, latency)
            if r.status_code == 429 or r.status_code >= 500:
                tries += 1
                if tries > self.max_retries:
                    r.raise_for_status()
                time.sleep(min(2 ** tries, 30) + random.random())
                continue
            r.raise_for_status()
            return r.json()

    def fetch_records(self, table_name: str, params: Dict[str, Any]) -> Dict[str, Any]:
        return self._post(f"/tables/{table_name}/records/query", params)

    def get_record_by_id(
        self, table_name: str, record_id: int, params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return self._post(f"/tables/{table_name}/records/{record_id}", params or {})


_client: ApperClient | None = None


def _settings() -> Dict[str, Any]:
    if has_app_context():
        cfg = current_app.config
        return {
            "project_id": cfg.get("APPER_PROJECT_ID", ""),
            "public_key": cfg.get("APPER_PUBLIC_KEY", ""),
            "base_url": cfg.get("APPER_API_URL", DEFAULT_API_URL),
            "timeout": int(cfg.get("APPER_TIMEOUT", 10)),
        }
    return {
        "project_id": os.getenv("APPER_PROJECT_ID", ""),
        "public_key": os.getenv("APPER_PUBLIC_KEY", ""),
        "base_url": os.getenv("APPER_API_URL", DEFAULT_API_URL),
        "timeout": int(os.getenv("APPER_TIMEOUT", "10")),
    }


def get_client() -> ApperClient:
    """Return the shared client, building it on first use."""
    global _client
    if _client is None:
        _client = ApperClient(**_settings())
    return _client


def reset_client() -> None:
    global _client
    _client = None
