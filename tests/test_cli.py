"""CLI tests for search, listing and status commands."""

import httpx
from typer.testing import CliRunner

import product_search.main as main_module
from product_search.search import ProductSearchEngine
from product_search.storage import build_sample_catalog
from product_search.vespa import VespaClient


def test_search_command_prints_matches() -> None:
    runner = CliRunner()
    result = runner.invoke(main_module.app, ["search", "iphone"])

    assert result.exit_code == 0
    assert "iPhone 15 Pro" in result.output
    assert "lexical" in result.output


def test_search_command_hybrid_mode_embeds_query() -> None:
    runner = CliRunner()
    result = runner.invoke(main_module.app, ["search", "coffee", "--mode", "hybrid"])

    assert result.exit_code == 0
    assert "5 result(s)" in result.output


def test_search_command_rejects_unknown_mode() -> None:
    runner = CliRunner()
    result = runner.invoke(main_module.app, ["search", "tv", "--mode", "fuzzy"])

    assert result.exit_code == 1
    assert "Unknown search type" in result.output


def test_products_command_lists_catalog() -> None:
    runner = CliRunner()
    result = runner.invoke(main_module.app, ["products"])

    assert result.exit_code == 0
    assert "Organic Coffee Beans" in result.output


def test_serve_command_passes_bind_options(monkeypatch) -> None:
    called: dict[str, object] = {}

    def fake_run_server(host=None, port=None) -> None:
        called["host"] = host
        called["port"] = port

    monkeypatch.setattr("product_search.server.run_server", fake_run_server)

    runner = CliRunner()
    result = runner.invoke(main_module.app, ["serve", "--host", "0.0.0.0", "--port", "9000"])

    assert result.exit_code == 0
    assert called == {"host": "0.0.0.0", "port": 9000}


def test_vespa_status_command_reports_disconnected(monkeypatch) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    engine = ProductSearchEngine(
        build_sample_catalog(),
        vespa=VespaClient("http://vespa.test:8080", transport=httpx.MockTransport(handler)),
    )
    monkeypatch.setattr(main_module, "build_engine", lambda: engine)

    runner = CliRunner()
    result = runner.invoke(main_module.app, ["vespa-status"])

    assert result.exit_code == 0
    assert '"connected": false' in result.output
