"""Review search page.

The page is a thin client over ``POST /api/search``: its script posts the
query, then asks ``POST /partials/results`` to render the returned hits so
that highlighting stays on the server.
"""

import html

from fastapi import APIRouter
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from src.api.deps import AppSettings
from src.search.highlight import (
    full_review_url,
    highlight_relevant_text,
    similarity_percent,
)
from src.search.models import ReviewHit

router = APIRouter(tags=["Page"])

PAGE_ERROR = "Failed to perform search. Please try again."
PLACEHOLDER = "Search for music reviews (e.g., 'party', 'breakup', 'summer vibes')"

_STYLE = """
body { font-family: system-ui, sans-serif; background: #f9fafb; margin: 0; }
main { max-width: 56rem; margin: 0 auto; padding: 3rem 1rem; }
h1 { text-align: center; }
input[type=search] { width: 100%; padding: .75rem 1rem; font-size: 1.1rem; box-sizing: border-box; }
.error { background: #fef2f2; border: 1px solid #fecaca; color: #b91c1c; padding: .75rem 1rem; margin: 1rem 0; }
.loading { text-align: center; color: #4b5563; }
.result { background: #fff; border: 1px solid #e5e7eb; padding: 1.5rem; margin: 1.5rem 0; }
.result header { display: flex; justify-content: space-between; }
.review-score { font-size: 1.5rem; font-weight: bold; color: #2563eb; }
.similarity { color: #6b7280; font-size: .875rem; }
mark { background: #fef9c3; }
"""

# Results are only replaced once both calls succeed; a failure shows the
# error and leaves the previous list in place.
_SCRIPT = """
var form = document.getElementById("search-form");
var input = document.getElementById("query");
var loading = document.getElementById("loading");
var error = document.getElementById("error");
var results = document.getElementById("results");

function postJson(url, body) {
  return fetch(url, {
    method: "POST",
    headers: {"Content-Type": "application/json"},
    body: JSON.stringify(body)
  }).then(function (response) {
    if (!response.ok) { throw new Error(url + " returned " + response.status); }
    return response;
  });
}

form.addEventListener("submit", async function (e) {
  e.preventDefault();
  var query = input.value.trim();
  if (!query) { return; }

  loading.hidden = false;
  error.hidden = true;
  try {
    var found = await (await postJson("/api/search", {query: query})).json();
    var rendered = await postJson("/partials/results", {query: query, result: found.result});
    results.innerHTML = await rendered.text();
  } catch (err) {
    console.error("Search failed", err);
    error.hidden = false;
  } finally {
    loading.hidden = true;
  }
});
"""


class ResultsFragmentRequest(BaseModel):
    """Hits from ``POST /api/search`` to render for a query."""

    query: str = Field(default="", description="Query the hits were found for")
    result: list[ReviewHit] = Field(default_factory=list)


def render_result(hit: ReviewHit, query: str, review_base_url: str) -> str:
    """Render one matched review as an HTML fragment."""
    payload = hit.payload
    review_score = "n/a" if payload.score is None else f"{payload.score:g}"
    url = html.escape(full_review_url(payload.review_url, review_base_url), quote=True)
    return (
        '<article class="result">'
        "<header><div>"
        f"<h2>{html.escape(payload.title)}</h2>"
        f"<p>{html.escape(payload.artists)}</p>"
        "</div>"
        f'<span class="review-score">{review_score}</span>'
        "</header>"
        "<p><strong>Relevant context: </strong>"
        f"<em>{highlight_relevant_text(payload.body, query)}</em></p>"
        "<footer>"
        f'<a href="{url}" target="_blank" rel="noopener noreferrer">Read full review &rarr;</a> '
        f'<span class="similarity">Similarity score: {similarity_percent(hit.score):.2f}%</span>'
        "</footer>"
        "</article>"
    )


def render_search_page() -> str:
    """Render the search page shell: form, indicators and an empty result list."""
    parts = [
        "<!DOCTYPE html>",
        '<html lang="en"><head><meta charset="utf-8">',
        "<title>Pitchfork Review Search</title>",
        f"<style>{_STYLE}</style></head><body><main>",
        "<h1>Pitchfork Review Search</h1>",
        '<form id="search-form" method="post" action="/api/search">',
        f'<input id="query" type="search" name="query" '
        f'placeholder="{html.escape(PLACEHOLDER, quote=True)}">',
        "</form>",
        f'<div id="error" class="error" role="alert" hidden>{html.escape(PAGE_ERROR)}</div>',
        '<div id="loading" class="loading" hidden>Searching...</div>',
        '<section id="results"></section>',
        f"<script>{_SCRIPT}</script></main></body></html>",
    ]
    return "".join(parts)


@router.get("/", response_class=HTMLResponse)
async def search_page() -> HTMLResponse:
    """Search page."""
    return HTMLResponse(render_search_page())


@router.post("/partials/results", response_class=HTMLResponse)
async def results_fragment(
    request: ResultsFragmentRequest,
    settings: AppSettings,
) -> HTMLResponse:
    """Render search hits as result articles, highlighted for the query."""
    base_url = settings.search.review_base_url
    return HTMLResponse(
        "".join(render_result(hit, request.query, base_url) for hit in request.result)
    )
