"""Behaviour tests for whole documentation runs.

The scenarios live in ``features/build_runs.feature``. Each ``given`` step
lays out source files under ``tmp_path/src``, the ``when`` steps run the
builder and the HTML writer, and the ``then`` steps inspect the warnings,
statistics and written pages kept in ``scenario_state``.

Usage:
    pytest tests/bdd/test_build_runs.py -v
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from keydoc.builder import DocumentBuilder
from keydoc.generator import HtmlSiteWriter

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "build_runs.feature"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, typ.Any]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _given_files(
    tmp_path: Path, scenario_state: dict[str, typ.Any], files: dict[str, str]
) -> None:
    src = tmp_path / "src"
    src.mkdir()
    for name, content in files.items():
        (src / name).write_text(content, encoding="utf-8")
    scenario_state["src"] = src


def _build(tmp_path: Path, scenario_state: dict[str, typ.Any], *, sort: bool) -> None:
    events: list[typ.Any] = []
    builder = DocumentBuilder(sort=sort, sink=events.append)
    stats = builder.run([scenario_state["src"]])
    written: list[Path] = []
    if stats.objects:
        writer = HtmlSiteWriter(builder.model, tmp_path / "site", builder.diagnostics)
        written = writer.run()
    scenario_state.update(
        builder=builder, stats=stats, events=events, written=written
    )


def _codes(scenario_state: dict[str, typ.Any]) -> list[str]:
    return [event.code for event in scenario_state["events"]]


def _page(tmp_path: Path, name: str) -> BeautifulSoup:
    html = (tmp_path / "site" / name).read_text(encoding="utf-8")
    return BeautifulSoup(html, "html.parser")


@given("a source file that joins the store module before another declares it")
def given_forward_reference(
    tmp_path: Path, scenario_state: dict[str, typ.Any]
) -> None:
    _given_files(
        tmp_path,
        scenario_state,
        {
            "a_users.c": (
                "/*!\n  @ingroup store\n  Saves a record.\n*/\n"
                "int store_save(const char *key);\n"
            ),
            "b_store.c": "/*!\n  @defgroup store  Record storage\n\n  Details.\n*/\n",
        },
    )


@given("a config module and a config markdown document")
def given_config_pair(tmp_path: Path, scenario_state: dict[str, typ.Any]) -> None:
    _given_files(
        tmp_path,
        scenario_state,
        {
            "config.c": "/*!\n  @defgroup config  Settings\n*/\n",
            "config.md": "# Config\n\nUser guide.\n",
        },
    )


@given("a Foo module, a foo document and a FOO class")
def given_three_foos(tmp_path: Path, scenario_state: dict[str, typ.Any]) -> None:
    _given_files(
        tmp_path,
        scenario_state,
        {
            "1_mod.c": "/*!\n  @defgroup Foo  The module\n*/\n",
            "foo.md": "# Foo\n\nThe guide.\n",
            "z_cls.c": "/*!\n  @class FOO  The class\n*/\n",
        },
    )


@given("a module whose functions are declared out of alphabetical order")
def given_unsorted_module(tmp_path: Path, scenario_state: dict[str, typ.Any]) -> None:
    _given_files(
        tmp_path,
        scenario_state,
        {
            "m.c": (
                "/*!\n  @defgroup m  M\n*/\n"
                "/*!\n  Zed.\n*/\nvoid zed(void);\n"
                "/*!\n  Abe.\n*/\nvoid abe(void);\n"
            )
        },
    )


@given("a README with a mainpage, a version and a bar color")
def given_readme_mainpage(tmp_path: Path, scenario_state: dict[str, typ.Any]) -> None:
    _given_files(
        tmp_path,
        scenario_state,
        {
            "README.md": (
                "@mainpage Gadgets\n"
                "@version 2.1\n"
                "@color w3-indigo\n"
                "\n"
                "Gadget library.\n"
                "\n"
                "Read the modules below.\n"
            ),
            "g.c": "/*!\n  @defgroup g  Gadgets core\n*/\n",
        },
    )


@given("a source file without keydoc comments")
def given_plain_source(tmp_path: Path, scenario_state: dict[str, typ.Any]) -> None:
    _given_files(
        tmp_path,
        scenario_state,
        {"plain.c": "/* ordinary comment */\nint main(void) { return 0; }\n"},
    )


@when("I build the site")
def when_build(tmp_path: Path, scenario_state: dict[str, typ.Any]) -> None:
    _build(tmp_path, scenario_state, sort=True)


@when("I build the site without sorting")
def when_build_unsorted(tmp_path: Path, scenario_state: dict[str, typ.Any]) -> None:
    _build(tmp_path, scenario_state, sort=False)


@then("the store module holds the joined function and the declaration")
def then_store_module_filled(scenario_state: dict[str, typ.Any]) -> None:
    [module] = scenario_state["builder"].model.modules
    assert module.section.subtitle == "Record storage"
    assert module.section.text == "Details."
    assert [function.name for function in module.functions] == ["store_save"]


@then("no warnings are raised")
def then_no_warnings(scenario_state: dict[str, typ.Any]) -> None:
    assert scenario_state["events"] == []


@then("one duplicate name warning is raised")
def then_one_duplicate(scenario_state: dict[str, typ.Any]) -> None:
    assert _codes(scenario_state) == ["W002"]


@then("both the module and the document are kept")
def then_pair_kept(scenario_state: dict[str, typ.Any]) -> None:
    stats = scenario_state["stats"]
    assert (stats.modules, stats.documents) == (1, 1)


@then("two duplicate name warnings are raised")
def then_two_duplicates(scenario_state: dict[str, typ.Any]) -> None:
    assert _codes(scenario_state) == ["W002", "W002"]


@then("the module, the document and the class are all kept")
def then_three_kept(scenario_state: dict[str, typ.Any]) -> None:
    stats = scenario_state["stats"]
    assert (stats.modules, stats.classes, stats.documents) == (1, 1, 1)


@then("the module page lists the functions in source order")
def then_source_order(tmp_path: Path) -> None:
    soup = _page(tmp_path, "m.html")
    assert [a.get_text() for a in soup.select("nav a")] == ["zed", "abe"]


@then("the index page shows the mainpage title and version")
def then_index_title(tmp_path: Path, scenario_state: dict[str, typ.Any]) -> None:
    index = _page(tmp_path, "index.html")
    assert index.h1.get_text(strip=True) == "Gadgets"
    assert index.select_one(".keydoc-version").get_text() == "version 2.1"
    assert scenario_state["stats"].documents == 0


@then("module pages use the mainpage bar color")
def then_bar_color(tmp_path: Path) -> None:
    assert "w3-indigo" in _page(tmp_path, "g.html").header["class"]


@then("a nothing to document warning is raised")
def then_nothing_warning(scenario_state: dict[str, typ.Any]) -> None:
    assert _codes(scenario_state) == ["W011"]
    assert scenario_state["stats"].files == 1


@then("no site is written")
def then_no_site(tmp_path: Path, scenario_state: dict[str, typ.Any]) -> None:
    assert scenario_state["written"] == []
    assert not (tmp_path / "site").exists()
