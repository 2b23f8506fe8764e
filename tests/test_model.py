"""Unit tests for document model ordering, collisions and statistics."""

from __future__ import annotations

from pathlib import Path

import pytest

from keydoc.model import (
    DocumentModel,
    Example,
    Function,
    MainPage,
    MarkdownDocument,
    Module,
    Section,
    normalize_title,
)


def _module(title: str) -> Module:
    return Module(Section(title, subtitle=""))


def test_sorted_insert_is_case_insensitive_and_stable() -> None:
    model = DocumentModel()
    for title in ("beta", "Alpha", "Beta", "gamma"):
        model.insert_module(_module(title))
    assert [module.title for module in model.modules] == [
        "Alpha",
        "beta",
        "Beta",
        "gamma",
    ]


def test_unsorted_model_keeps_encounter_order() -> None:
    model = DocumentModel(sort=False)
    module = _module("m")
    model.insert_module(module)
    for name in ("zeta", "alpha"):
        model.insert_function(module, Function(name, f"void {name}(void)"))
    assert [function.name for function in module.functions] == ["zeta", "alpha"]


def test_duplicate_function_names_are_kept() -> None:
    model = DocumentModel()
    module = _module("m")
    model.insert_module(module)
    model.insert_function(module, Function("run", "void run(void)"))
    model.insert_function(module, Function("run", "void run(int)"))
    assert [f.prototype for f in module.functions] == [
        "void run(void)",
        "void run(int)",
    ]


def test_find_separates_modules_and_classes() -> None:
    model = DocumentModel()
    model.insert_module(_module("Shape"), is_class=True)
    assert model.find("Shape", is_class=True) is not None
    assert model.find("Shape", is_class=False) is None


@pytest.mark.parametrize(
    ("title", "expected"),
    [("Notes.MD", "notes"), ("guide.markdown", "guide"), (".md", ".md"), ("io", "io")],
)
def test_normalize_title(title: str, expected: str) -> None:
    assert normalize_title(title) == expected


def test_title_collides_across_kinds() -> None:
    model = DocumentModel()
    model.insert_document(
        MarkdownDocument(Section("Maths.md"), path=Path("Maths.md"))
    )
    assert model.title_collides("maths")
    assert not model.title_collides("physics")


def test_index_title_reserved_only_with_mainpage_or_pages() -> None:
    model = DocumentModel()
    assert not model.title_collides("index")
    model.mainpage = MainPage(Section("Home"))
    assert model.title_collides("Index.md")


def test_stub_until_declared() -> None:
    module = Module(Section("io"))
    assert module.is_stub
    module.section.subtitle = ""
    assert not module.is_stub


def test_stats_count_every_kind() -> None:
    model = DocumentModel()
    module = _module("m")
    model.insert_module(module)
    model.insert_function(module, Function("f", "f()"))
    shape = _module("Shape")
    model.insert_module(shape, is_class=True)
    model.insert_function(shape, Function("area", "area()"))
    model.insert_function(shape, Function("scale", "scale(k)"))
    model.mainpage = MainPage(Section("Home", examples=[Example("Example: A")]))
    stats = model.stats(warnings=2)
    assert (stats.modules, stats.functions, stats.classes, stats.methods) == (
        1,
        1,
        1,
        2,
    )
    assert stats.examples == 1
    assert stats.warnings == 2
    assert stats.objects == 7
    assert stats.pages == 2


def test_empty_model_has_no_objects() -> None:
    assert DocumentModel().stats().objects == 0
