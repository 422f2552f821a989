"""Tests for the FastAPI page surface."""

import re
from typing import Any

import pytest
from fastapi.testclient import TestClient

from school_meal.api.app import create_app
from school_meal.config import NeisSettings
from school_meal.domain.shared.errors import NetworkError
from school_meal.domain.shared.value_objects import DateToken


@pytest.fixture
def client(mock_fetch_client: Any) -> Any:
    app = create_app(settings=NeisSettings(), fetch_client=mock_fetch_client)
    with TestClient(app) as test_client:
        yield test_client


class TestMealPage:
    """Test GET / triggers."""

    def test_search_by_date(self, client: Any, mock_fetch_client: Any) -> None:
        response = client.get("/", params={"date": "2024-03-15"})

        assert response.status_code == 200
        assert "2024년 3월 15일 금요일 급식 정보" in response.text
        assert "<li>현미밥</li>" in response.text
        assert 'class="meal-info"' in response.text
        assert 'class="error hidden"' in response.text
        mock_fetch_client.fetch.assert_awaited_once_with(DateToken(value="20240315"))

    def test_page_ready_fetches_today(self, client: Any, mock_fetch_client: Any) -> None:
        response = client.get("/")

        assert response.status_code == 200
        mock_fetch_client.fetch.assert_awaited_once()

    def test_page_ready_form_date_matches_fetched_date(
        self, client: Any, mock_fetch_client: Any
    ) -> None:
        response = client.get("/")

        match = re.search(r'name="date" value="([0-9-]{10})"', response.text)
        assert match is not None
        token = DateToken(value=match.group(1).replace("-", ""))
        mock_fetch_client.fetch.assert_awaited_once_with(token)

    def test_empty_date_alerts(self, client: Any, mock_fetch_client: Any) -> None:
        response = client.get("/", params={"date": ""})

        assert "alert(" in response.text
        assert 'class="meal-info hidden"' in response.text
        mock_fetch_client.fetch.assert_not_awaited()

    def test_failure_renders_error(self, client: Any, mock_fetch_client: Any) -> None:
        mock_fetch_client.fetch.side_effect = NetworkError("down")

        response = client.get("/", params={"date": "2024-03-15"})

        assert response.status_code == 200
        assert 'class="error"' in response.text
        assert 'class="meal-info hidden"' in response.text

    def test_health(self, client: Any) -> None:
        assert client.get("/health").json() == {"status": "ok"}
