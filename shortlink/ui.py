from __future__ import annotations

import logging

from fastapi import HTTPException
from fastapi.responses import HTMLResponse
from jinja2 import Environment, TemplateError

logger = logging.getLogger("shortlink.ui")

INDEX_HTML = """
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8"/>
  <meta name="viewport" content="width=device-width, initial-scale=1"/>
  <title>URL Shortener</title>
  <script src="https://cdn.tailwindcss.com"></script>
  <script src="https://unpkg.com/htmx.org@1.9.12"></script>
  <link rel="stylesheet" href="/static/style.css"/>
</head>
<body class="bg-gray-100 min-h-screen">
  <div class="container mx-auto max-w-xl px-4 py-16">
    <h1 class="text-3xl font-bold text-gray-800 mb-2">URL Shortener</h1>
    <p class="text-gray-500 mb-8">Paste a long link, get a short one.</p>

    <form hx-post="/shorten" hx-target="#result" hx-swap="innerHTML"
          class="bg-white p-6 rounded-lg shadow-md">
      <label for="url" class="block text-gray-700 mb-2">Long URL</label>
      <div class="flex space-x-2">
        <input type="text" name="url" id="url" required
               placeholder="https://example.com/very/long/url"
               class="flex-1 p-2 border rounded-md"/>
        <button type="submit"
                class="px-4 py-2 bg-blue-500 text-white rounded-md hover:bg-blue-600">
          Shorten
        </button>
      </div>
      <div id="result"></div>
    </form>
  </div>
</body>
</html>
"""

RESULT_TEMPLATE = """
<div class="mt-4 p-4 bg-green-100 rounded-md">
  <p class="text-green-800 mb-2">URL Shortened Successfully!</p>
  <div class="flex items-center space-x-2">
    <input type="text" readonly value="{{ short_url }}"
      class="flex-1 p-2 border rounded-md bg-white"
      id="shorturl-{{ token }}">
    <button onclick="navigator.clipboard.writeText(document.getElementById('shorturl-{{ token }}').value)"
      class="px-4 py-2 bg-blue-500 text-white rounded-md hover:bg-blue-600">
      Copy
    </button>
  </div>
</div>
"""

_env = Environment(autoescape=True)
result_template = _env.from_string(RESULT_TEMPLATE)


def index_page() -> HTMLResponse:
    return HTMLResponse(INDEX_HTML)


def build_short_url(host: str, token: str) -> str:
    return f"http://{host}/{token}"


def result_fragment(short_url: str, token: str) -> HTMLResponse:
    """
    Renders the htmx fragment for a freshly shortened link.
    A render failure is logged and surfaces as a 500.
    """
    try:
        body = result_template.render(short_url=short_url, token=token)
    except TemplateError as e:
        logger.exception("Failed to render result fragment for %s", token)
        raise HTTPException(status_code=500, detail="Failed to render response") from e
    return HTMLResponse(body)
