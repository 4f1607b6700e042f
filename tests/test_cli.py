# tests/test_cli.py
import cli


def test_names_resolve_to_ids(monkeypatch):
    monkeypatch.setattr(cli, "product_cache", [
        {"id": "0123456789abcdef01234567", "name": "Bolts M8"},
        {"id": "89abcdef0123456789abcdef", "name": "Nuts"},
    ])
    assert cli.resolve_product_id("bolts m8") == "0123456789abcdef01234567"
    assert cli.resolve_product_id("89abcdef0123456789abcdef") == "89abcdef0123456789abcdef"

    words = cli.get_product_completer().words
    assert "Nuts" in words
    assert "0123456789abcdef01234567" in words
