"""Issue tracker capability shared by all tracker backends."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable

import httpx

from todotrack.core.errors import TrackerError
from todotrack.todos.annotation import Annotation

logger = logging.getLogger(__name__)


def issue_body(annotation: Annotation) -> str:
    """Render an annotation's continuation lines as an issue body.

    Comments are joined with single spaces. An empty comment becomes a line
    break, and the comment after it starts without a leading space.

    Examples
    --------
    >>> issue_body(Annotation(1, "// ", "TODO", "x", comments=["More", "", "And More"]))
    'More\\nAnd More'
    """
    body = ""
    last = ""
    for comment in annotation.comments:
        if comment == "":
            body += "\n"
        else:
            if last != "":
                body += " "
            body += comment
        last = comment
    return body


class IssueTracker(ABC):
    """An external issue tracker.

    Subclasses implement :meth:`closed_ids` and :meth:`report`; reporting a
    batch of annotations is done sequentially by :meth:`report_annotations`
    so issue numbers follow source order.
    """

    name = "tracker"

    @abstractmethod
    def closed_ids(self) -> set[int]:
        """Return the ids of every closed issue."""

    @abstractmethod
    def report(self, title: str, body: str, labels: set[str]) -> int:
        """File a new issue and return its id."""

    def report_annotation(self, annotation: Annotation) -> int:
        """Report one annotation and record the new id on it."""
        if annotation.issue_id is not None:
            raise ValueError(f"Annotation on line {annotation.line} is already reported")

        issue_id = self.report(annotation.title, issue_body(annotation), {annotation.keyword})
        annotation.issue_id = issue_id
        logger.info("Reported %r as #%s on %s", annotation.title, issue_id, self.name)
        return issue_id

    def report_annotations(self, annotations: Iterable[Annotation]) -> list[int]:
        """Report annotations one after another, in order.

        Stops at the first :class:`TrackerError`; annotations reported before
        the failure keep their new ids.
        """
        return [self.report_annotation(a) for a in annotations]

    def close(self) -> None:
        """Release any network resources."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class HttpTracker(IssueTracker):
    """Base for trackers speaking JSON over HTTP through an httpx client.

    Parameters
    ----------
    base_url : str
        API root, e.g. ``https://api.github.com``.
    headers : dict[str, str]
        Headers sent with every request (authentication, accept type).
    client : httpx.Client | None
        Client to use instead of creating one; tests pass a client built on
        ``httpx.MockTransport``.
    timeout : float
        Request timeout in seconds.
    """

    per_page = 50
    # Query parameter carrying the page size
    page_size_param = "per_page"

    def __init__(
        self,
        base_url: str,
        headers: dict[str, str],
        client: httpx.Client | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)
        self._base_url = base_url.rstrip("/")
        self._headers = headers

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body.

        Raises
        ------
        TrackerError
            On transport errors, non-2xx responses and invalid JSON.
        """
        url = f"{self._base_url}{path}"
        try:
            response = self._client.request(method, url, headers=self._headers, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TrackerError(
                f"{self.name}: {method} {url} returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise TrackerError(f"{self.name}: {method} {url} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise TrackerError(f"{self.name}: {method} {url} returned invalid JSON") from e

    def _paginate(self, path: str, params: dict[str, Any] | None = None) -> list[Any]:
        """Fetch pages starting at 1 until an empty page is returned."""
        items: list[Any] = []
        page = 1
        while True:
            query = {**(params or {}), "page": page, self.page_size_param: self.per_page}
            data = self._request("GET", path, params=query)
            if not isinstance(data, list):
                raise TrackerError(f"{self.name}: expected a list from {path}")
            if not data:
                return items
            items.extend(data)
            page += 1

    def _issue_number(self, item: Any) -> int:
        number = item.get("number") if isinstance(item, dict) else None
        if not isinstance(number, int) or isinstance(number, bool):
            raise TrackerError(f"{self.name}: can't parse issue number from {item!r}")
        return number
