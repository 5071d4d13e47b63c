from __future__ import annotations

from pathlib import Path


ROOT = Path(__file__).resolve().parents[2]


def test_relay_service_does_not_import_provider_adapters_directly():
    disallowed: list[str] = []
    for py_file in (ROOT / "src/multiai/core/relay").rglob("*.py"):
        content = py_file.read_text(encoding="utf-8")
        if "openai_compatible" in content or "anthropic_adapter" in content or "google_adapter" in content:
            disallowed.append(str(py_file))
    assert disallowed == [], f"Relay imported provider adapter directly: {disallowed}"


def test_apps_do_not_use_http_clients_directly():
    disallowed: list[str] = []
    for py_file in (ROOT / "src/multiai/apps").rglob("*.py"):
        content = py_file.read_text(encoding="utf-8")
        if "AsyncClient(" in content or "httpx.Client(" in content or "requests." in content:
            disallowed.append(str(py_file))
    assert disallowed == [], f"App module made direct HTTP provider calls: {disallowed}"


def test_environment_is_only_read_by_config_loader():
    disallowed: list[str] = []
    for py_file in (ROOT / "src/multiai").rglob("*.py"):
        if py_file.name == "loader.py":
            continue
        content = py_file.read_text(encoding="utf-8")
        if "os.getenv" in content or "os.environ" in content:
            disallowed.append(str(py_file))
    assert disallowed == [], f"Ambient environment lookup outside config loader: {disallowed}"
