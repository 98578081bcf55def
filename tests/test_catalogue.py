import json

from helpmenu.catalogue import HelpCatalogue, normalize_module_key
from helpmenu.schemas import ModuleHelpSchema


def test_default_catalogue_loads_all_modules(catalogue):
    assert len(catalogue) == 22
    assert "Clean Module" in catalogue
    assert catalogue.names() == sorted(catalogue.names())
    assert isinstance(catalogue.get("Welcome"), ModuleHelpSchema)


def test_filter_usage_keeps_literal_newline_markers(catalogue):
    create_line = catalogue.get("Filter").commands[1]
    assert "\\n!Response1" in create_line


def test_find_by_trigger_is_case_and_space_insensitive(catalogue):
    assert catalogue.find_by_trigger("antilink") == "Antilink"
    assert catalogue.find_by_trigger("ANTIBOT") == "AntiBot"
    assert catalogue.find_by_trigger("cleanmodule") == "Clean Module"
    assert catalogue.find_by_trigger("missing") is None


def test_normalize_module_key():
    assert normalize_module_key("Service Clean") == "serviceclean"
    assert normalize_module_key("MyID") == "myid"


def test_invalid_entries_are_skipped(tmp_path):
    path = tmp_path / "help.json"
    path.write_text(json.dumps({
        "Good": {"summary": "ok", "commands": ["/good - works"], "details": "fine"},
        "Bad": {"commands": "not a list"},
    }), encoding="utf-8")

    catalogue = HelpCatalogue(path)

    assert catalogue.names() == ["Good"]


def test_missing_file_gives_empty_catalogue(tmp_path):
    catalogue = HelpCatalogue(tmp_path / "missing.json")
    assert len(catalogue) == 0


def test_catalogue_from_mapping():
    catalogue = HelpCatalogue(modules={"Solo": ModuleHelpSchema(summary="s")})
    assert catalogue.get("Solo").commands == []
    assert catalogue.get("Solo").details == ""
