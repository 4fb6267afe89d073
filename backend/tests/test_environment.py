"""Deployment mode resolution and the values derived from it."""

import logging
from dataclasses import FrozenInstanceError

import pytest

from clubpro.environment import (
    ALLOWED_ORIGINS,
    DeploymentMode,
    SpaStrategy,
    build_environment,
    resolve,
)


def test_serverless_wins_over_production(make_settings):
    settings = make_settings(VERCEL="1", NODE_ENV="production")
    assert resolve(settings) is DeploymentMode.SERVERLESS


def test_production_signal(make_settings):
    assert resolve(make_settings(NODE_ENV="production")) is DeploymentMode.PRODUCTION


@pytest.mark.parametrize("node_env", [None, "", "development", "test", "staging"])
def test_everything_else_is_development(make_settings, node_env):
    assert resolve(make_settings(NODE_ENV=node_env)) is DeploymentMode.DEVELOPMENT


def test_empty_serverless_signal_is_ignored(make_settings):
    assert resolve(make_settings(VERCEL="")) is DeploymentMode.DEVELOPMENT


def test_resolution_is_logged(make_settings, caplog):
    with caplog.at_level(logging.INFO, logger="clubpro.environment"):
        resolve(make_settings(NODE_ENV="production"))
    assert "production" in caplog.text


def test_serverless_environment(make_settings, asset_tree):
    env = build_environment(make_settings(VERCEL="1"))
    assert env.mode is DeploymentMode.SERVERLESS
    assert env.spa_strategy is SpaStrategy.BUNDLED_ENTRY
    # Only the uploads root; the platform serves the bundle
    assert [r.url_prefix for r in env.asset_roots] == ["/uploads"]
    assert env.spa_entry == asset_tree / "dist" / "index.html"
    assert env.allowed_origins == ALLOWED_ORIGINS[DeploymentMode.SERVERLESS]
    assert not env.expose_error_detail


def test_production_environment(make_settings, asset_tree):
    env = build_environment(make_settings(NODE_ENV="production"))
    assert env.mode is DeploymentMode.PRODUCTION
    assert env.spa_strategy is SpaStrategy.BUNDLED_ENTRY
    assert [(r.url_prefix, r.directory) for r in env.asset_roots] == [
        ("", asset_tree / "dist" / "public"),
        ("/uploads", asset_tree / "uploads"),
    ]
    assert not any(r.typed_scripts for r in env.asset_roots)
    assert env.allowed_origins == ("https://soccerclubpro.vercel.app",)
    assert not env.expose_error_detail


def test_development_environment(make_settings, asset_tree):
    env = build_environment(make_settings())
    assert env.mode is DeploymentMode.DEVELOPMENT
    assert env.spa_strategy is SpaStrategy.DEV_REDIRECT
    primary, mirror, uploads = env.asset_roots
    assert (primary.url_prefix, primary.directory, primary.typed_scripts) == (
        "",
        asset_tree / "client",
        True,
    )
    assert (mirror.url_prefix, mirror.directory) == ("/node_modules", asset_tree / "node_modules")
    assert uploads.url_prefix == "/uploads"
    assert env.dev_server_url == "http://localhost:5173"
    assert "http://localhost:5000" in env.allowed_origins
    assert env.expose_error_detail


def test_origin_sets_are_disjoint():
    sets = [set(origins) for origins in ALLOWED_ORIGINS.values()]
    assert len(sets) == 3
    for i, first in enumerate(sets):
        for second in sets[i + 1:]:
            assert not first & second


def test_dev_server_url_trailing_slash_is_dropped(make_settings):
    env = build_environment(make_settings(DEV_SERVER_URL="http://localhost:3000/"))
    assert env.dev_server_url == "http://localhost:3000"


def test_environment_is_immutable(make_settings):
    env = build_environment(make_settings())
    with pytest.raises(FrozenInstanceError):
        env.mode = DeploymentMode.PRODUCTION


def test_relative_paths_resolve_against_project_root(make_settings, asset_tree):
    settings = make_settings(UPLOADS_DIR="media/uploads")
    assert settings.UPLOADS_DIR == str(asset_tree / "media" / "uploads")


def test_absolute_paths_are_kept(make_settings, tmp_path_factory):
    elsewhere = tmp_path_factory.mktemp("elsewhere")
    settings = make_settings(CLIENT_DIR=str(elsewhere))
    assert settings.CLIENT_DIR == str(elsewhere)
