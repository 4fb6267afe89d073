"""Shared fixtures: an on-disk asset tree and per-mode app clients."""

from contextlib import asynccontextmanager

import pytest
from httpx import AsyncClient, ASGITransport

from clubpro.config import Settings, absolutize_paths
from clubpro.main import create_app

SERVERLESS = {"VERCEL": "1"}
PRODUCTION = {"NODE_ENV": "production"}
DEVELOPMENT = {}

INDEX_HTML = "<!DOCTYPE html><html><body><div id=\"root\">built bundle</div></body></html>"


@pytest.fixture
def asset_tree(tmp_path):
    """Lay out client/, node_modules/, dist/ and uploads/ like the real project."""
    files = {
        "client/app.js": "export const app = 1;",
        "client/main.ts": "export const main: number = 1;",
        "client/widget.tsx": "export const Widget = () => null;",
        "client/style.css": "body { color: #232e5d; }",
        "client/nested/page.mjs": "export default 'page';",
        "node_modules/lib/index.mjs": "export const lib = true;",
        "node_modules/lib/package.json": "{\"name\": \"lib\"}",
        "dist/public/bundle.js": "console.log('bundle');",
        "dist/public/logo.svg": "<svg xmlns=\"http://www.w3.org/2000/svg\"></svg>",
        "dist/index.html": INDEX_HTML,
        "uploads/report.txt": "VVC " * 2000,
        "secret.txt": "outside every asset root",
    }
    for relative, content in files.items():
        target = tmp_path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
    return tmp_path


@pytest.fixture
def make_settings(asset_tree):
    def _make(**overrides) -> Settings:
        values = {
            "VERCEL": None,
            "NODE_ENV": None,
            "DATABASE_URL": None,
            "PROJECT_ROOT": str(asset_tree),
        }
        values.update(overrides)
        return absolutize_paths(Settings(_env_file=None, **values))

    return _make


@pytest.fixture
def make_client(make_settings):
    @asynccontextmanager
    async def _client(**overrides):
        app = create_app(make_settings(**overrides))
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c

    return _client
