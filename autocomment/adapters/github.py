"""GitHub API adapter."""

from datetime import datetime
from typing import Any, Dict

import requests

from autocomment.adapters.base import CommentAdapter, RemoteCallError
from autocomment.models import Comment


def _parse_iso(s: str | None) -> datetime | None:
    if not s:
        return None
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _comment_from_api(data: Dict[str, Any]) -> Comment:
    user = data.get("user") or {}
    # Enterprise proxies may return a trimmed object on 201
    created = _parse_iso(data.get("created_at"))
    updated = _parse_iso(data.get("updated_at")) or created
    return Comment(
        id=data.get("id"),
        body=data.get("body") or "",
        author=user.get("login", ""),
        created_at=created,
        updated_at=updated,
        html_url=data.get("html_url"),
    )


class GitHubAdapter(CommentAdapter):
    """GitHub REST API implementation."""

    def __init__(self, token: str, api_url: str = "https://api.github.com") -> None:
        self._api_url = api_url.rstrip("/")
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        try:
            resp = self._session.request(method, url, params=params, json=json, timeout=30)
        except requests.RequestException as e:
            raise RemoteCallError(str(e)) from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                data = resp.json()
            except ValueError:
                data = None
            if isinstance(data, dict) and data.get("message"):
                msg = data["message"]
            raise RemoteCallError(f"{resp.status_code}: {msg}")
        return resp

    def create_comment(self, repo: str, issue_number: int, body: str) -> Comment:
        resp = self._request(
            "POST",
            f"/repos/{repo}/issues/{issue_number}/comments",
            json={"body": body},
        )
        try:
            data = resp.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {}
        return _comment_from_api({"body": body, **data})
