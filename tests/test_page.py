"""Tests for the search page and its result fragments."""

import re

from conftest import make_hit
from httpx import AsyncClient

from src.api import page
from src.api.page import PAGE_ERROR, render_result, render_search_page
from src.search.models import ReviewHit, ReviewPayload


def _script_block(name: str) -> str:
    """Body of the ``try``/``catch``/``finally`` block of the submit handler."""
    match = re.search(name + r"\s*(?:\(\w+\))?\s*\{(.*?)\n  \}", page._SCRIPT, re.DOTALL)
    assert match is not None
    return match.group(1)


class TestRenderResult:
    def test_renders_review(self) -> None:
        hit = ReviewHit(
            id="1",
            score=0.87654,
            payload=ReviewPayload(
                title="Discovery",
                artists="Daft Punk",
                body="A great party record. Nothing else.",
                score=9.5,
                review_url="/reviews/albums/discovery/",
            ),
        )

        html = render_result(hit, "party", "https://pitchfork.com")

        assert "<h2>Discovery</h2>" in html
        assert "Daft Punk" in html
        assert "A great <mark>party</mark> record" in html
        assert "Nothing else" not in html
        assert "9.5" in html
        assert "Similarity score: 87.65%" in html
        assert 'href="https://pitchfork.com/reviews/albums/discovery/"' in html

    def test_missing_review_score(self) -> None:
        html = render_result(ReviewHit(id="1", score=0.5), "x", "https://pitchfork.com")
        assert "n/a" in html
        assert 'href="#"' in html

    def test_escapes_title(self) -> None:
        hit = ReviewHit(id="1", score=0.5, payload=ReviewPayload(title="<script>"))
        assert "<script>" not in render_result(hit, "x", "https://pitchfork.com")


class TestRenderSearchPage:
    def test_shell(self) -> None:
        html = render_search_page()

        assert 'id="search-form"' in html
        assert '<section id="results"></section>' in html
        assert f'<div id="error" class="error" role="alert" hidden>{PAGE_ERROR}</div>' in html
        assert '<div id="loading" class="loading" hidden>' in html

    def test_script_posts_to_search_endpoint(self) -> None:
        assert 'postJson("/api/search", {query: query})' in page._SCRIPT
        assert "if (!query) { return; }" in page._SCRIPT

    def test_failed_search_keeps_previous_results(self) -> None:
        assert "results.innerHTML" in _script_block("try")
        assert "results" not in _script_block("catch")
        assert "error.hidden = false" in _script_block("catch")

    def test_loading_cleared_in_all_cases(self) -> None:
        assert "loading.hidden = true" in _script_block("finally")


class TestSearchPage:
    """Tests for GET / and POST /partials/results."""

    async def test_page_does_not_search(self, client: AsyncClient, fake_store) -> None:
        response = await client.get("/", params={"query": "party"})

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert fake_store.searches == []

    async def test_renders_search_response(self, client: AsyncClient, fake_store) -> None:
        fake_store.results = [make_hit("1", 0.91)]
        found = (await client.post("/api/search", json={"query": "party"})).json()

        response = await client.post(
            "/partials/results",
            json={"query": "party", "result": found["result"]},
        )

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert response.text.count('<article class="result">') == 1
        assert "Great <mark>party</mark> anthem" in response.text
        assert "Slow and sad" not in response.text
        assert "Similarity score: 91.00%" in response.text
        assert 'href="https://pitchfork.com/reviews/albums/party-album/"' in response.text

    async def test_empty_result(self, client: AsyncClient) -> None:
        response = await client.post("/partials/results", json={"query": "party", "result": []})

        assert response.status_code == 200
        assert response.text == ""
