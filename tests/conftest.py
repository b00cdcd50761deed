from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest

from issue_insights.classification import IssueClassifier
from issue_insights.models import IssueRecord

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_issue(
    number: int = 1,
    title: Optional[str] = "",
    body: Optional[str] = "",
    labels: Optional[List[Any]] = None,
    state: str = "open",
    created_days_ago: Optional[float] = 1,
    closed_days_ago: Optional[float] = None,
) -> IssueRecord:
    created_at = NOW - timedelta(days=created_days_ago) if created_days_ago is not None else None
    closed_at = NOW - timedelta(days=closed_days_ago) if closed_days_ago is not None else None
    return IssueRecord(
        number=number,
        title=title,
        body=body,
        labels=list(labels or []),
        state=state,
        created_at=created_at,
        closed_at=closed_at,
        updated_at=created_at,
        issue_id=number * 1000,
        html_url=f"https://github.com/example/repo/issues/{number}",
    )


def issue_payload(number: int, title: str, state: str = "open", **extra: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": number * 1000,
        "number": number,
        "title": title,
        "body": "",
        "labels": [],
        "state": state,
        "created_at": "2024-05-30T10:00:00Z",
        "updated_at": "2024-05-30T10:00:00Z",
        "closed_at": None,
        "html_url": f"https://github.com/example/repo/issues/{number}",
    }
    payload.update(extra)
    return payload


@pytest.fixture
def classifier() -> IssueClassifier:
    return IssueClassifier()
