"""FastAPI application entrypoint."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from scholarfeed.api.routes import router

INDEX_HTML = """
<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Scholar Feed</title>
    <style>
      :root {
        color-scheme: light;
        font-family: system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
        --color-paper: #f8f6f1;
        --color-ink: #23304a;
        --color-accent: #3d6bb3;
        --color-accent-soft: #dde7f6;
        background: var(--color-paper);
        color: var(--color-ink);
      }

      body {
        margin: 0;
        min-height: 100vh;
        display: flex;
        justify-content: center;
      }

      main {
        width: min(720px, 100% - 48px);
        padding: 48px 0;
        display: grid;
        gap: 24px;
      }

      h1 {
        margin: 0;
        color: var(--color-accent);
      }

      form {
        display: flex;
        gap: 12px;
      }

      input {
        flex: 1;
        padding: 12px 16px;
        border-radius: 12px;
        border: 1px solid var(--color-accent-soft);
        font-size: 1rem;
      }

      button {
        appearance: none;
        border: none;
        border-radius: 12px;
        padding: 12px 20px;
        background: var(--color-accent);
        color: white;
        font-size: 1rem;
        cursor: pointer;
      }

      button:disabled {
        opacity: 0.6;
        cursor: progress;
      }

      .interests {
        display: flex;
        flex-wrap: wrap;
        gap: 8px;
      }

      .interest {
        background: var(--color-accent-soft);
        border-radius: 999px;
        padding: 6px 12px;
        cursor: pointer;
      }

      .empty {
        font-style: italic;
        opacity: 0.7;
      }

      article {
        background: white;
        border-radius: 16px;
        padding: 24px;
        box-shadow: 0 8px 24px rgba(35, 48, 74, 0.08);
      }

      article h2 {
        margin-top: 0;
      }
    </style>
  </head>
  <body>
    <main>
      <h1>Scholar Feed</h1>
      <p>Add a few interests and get a plain-language summary of a scholarly article.</p>
      <form id="interest-form">
        <input id="interest-input" placeholder="e.g. AI, climate, genetics" autocomplete="off" />
        <button type="submit">Add</button>
      </form>
      <div id="interests" class="interests"><span class="empty">No interests selected yet</span></div>
      <div><button id="generate" type="button" disabled>Generate article</button></div>
      <article id="article" hidden>
        <h2 id="article-title"></h2>
        <p id="article-summary"></p>
        <p id="article-original" class="empty"></p>
        <a id="article-link" target="_blank" rel="noopener" hidden>Read the article</a>
      </article>
    </main>
    <script>
      const interests = [];
      const list = document.getElementById("interests");
      const input = document.getElementById("interest-input");
      const generate = document.getElementById("generate");

      function renderInterests() {
        list.replaceChildren();
        if (interests.length === 0) {
          const empty = document.createElement("span");
          empty.className = "empty";
          empty.textContent = "No interests selected yet";
          list.append(empty);
        }
        interests.forEach((value, index) => {
          const chip = document.createElement("span");
          chip.className = "interest";
          chip.textContent = value + " \\u00d7";
          chip.addEventListener("click", () => {
            interests.splice(index, 1);
            renderInterests();
          });
          list.append(chip);
        });
        generate.disabled = interests.length === 0;
      }

      document.getElementById("interest-form").addEventListener("submit", (event) => {
        event.preventDefault();
        const value = input.value.trim();
        if (value && !interests.includes(value)) {
          interests.push(value);
          renderInterests();
        }
        input.value = "";
      });

      function showArticle(article) {
        document.getElementById("article").hidden = false;
        document.getElementById("article-title").textContent = article.title;
        document.getElementById("article-summary").textContent = article.summary;
        document.getElementById("article-original").textContent = article.originalTitle
          ? "Original title: " + article.originalTitle
          : "";
        const link = document.getElementById("article-link");
        link.hidden = !article.link;
        link.href = article.link || "#";
      }

      generate.addEventListener("click", async () => {
        generate.disabled = true;
        generate.textContent = "Generating...";
        try {
          const response = await fetch("/api/article", {
            method: "POST",
            headers: { "Content-Type": "application/json" },
            body: JSON.stringify({ interests }),
          });
          const payload = await response.json();
          if (!response.ok) {
            throw new Error(payload.error || "Request failed");
          }
          showArticle(payload);
        } catch (error) {
          showArticle({
            title: "Error Generating Article",
            summary: error.message || "An error occurred while generating the article. Please try again later.",
          });
        } finally {
          generate.textContent = "Generate article";
          generate.disabled = interests.length === 0;
        }
      });
    </script>
  </body>
</html>
"""


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [str(error.get("msg", "")) for error in exc.errors()]
    detail = "; ".join(message for message in messages if message) or "Invalid request"
    return JSONResponse(status_code=400, content={"error": detail})


def create_app() -> FastAPI:
    app = FastAPI(title="Scholar Feed", description="Plain-language summaries of scholarly articles")
    app.include_router(router, prefix="/api")
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)

    @app.get("/", response_class=HTMLResponse)
    async def index() -> str:
        return INDEX_HTML

    return app


app = create_app()
