"""Tests for vitex.patterns."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from vitex.errors import PatternError
from vitex.patterns import FILES, LITERAL, NESTED, expand_pattern, parse_pattern


def _touch(root: Path, *relatives: str) -> None:
    for relative in relatives:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")


def test_parse_pattern_classifies_supported_shapes() -> None:
    assert parse_pattern("Styles/main.scss").kind == LITERAL

    files = parse_pattern("Styles/*.scss")
    assert files.kind == FILES
    assert files.directory == "Styles"
    assert files.matches_name("main.scss")
    assert not files.matches_name("main.css")
    assert not files.matches_name("mainXscss")

    nested = parse_pattern("Resources/Styles/*/*.scss")
    assert nested.kind == NESTED
    assert nested.directory == "Resources/Styles"

    top_level = parse_pattern("*.js")
    assert top_level.kind == FILES
    assert top_level.directory == ""


@pytest.mark.parametrize(
    "raw",
    [
        "Styles/**/*.scss",
        "Sty*/main.scss",
        "Styles/*/*/*.scss",
        "Styles/*/Partials/*.scss",
        "Styles/*/",
    ],
)
def test_parse_pattern_rejects_unsupported_shapes(raw: str) -> None:
    with pytest.raises(PatternError):
        parse_pattern(raw)


def test_expand_literal_pattern_skips_existence_check(tmp_path: Path) -> None:
    result = expand_pattern(tmp_path, "JavaScript/missing.js")
    assert result == [tmp_path / "JavaScript" / "missing.js"]


def test_expand_direct_children_honours_ignore_underscore(tmp_path: Path) -> None:
    _touch(tmp_path, "Styles/a.scss", "Styles/_b.scss", "Styles/readme.md")

    result = expand_pattern(tmp_path, "Styles/*.scss", ignore_underscore=True)

    assert result == [tmp_path / "Styles" / "a.scss"]


def test_expand_direct_children_keeps_partials_by_default(tmp_path: Path) -> None:
    _touch(tmp_path, "Styles/a.scss", "Styles/_b.scss")

    result = expand_pattern(tmp_path, "Styles/*.scss")

    assert [path.name for path in result] == ["_b.scss", "a.scss"]


def test_expand_direct_children_ignores_directories(tmp_path: Path) -> None:
    _touch(tmp_path, "Styles/main.scss", "Styles/nested.scss/inner.scss")

    result = expand_pattern(tmp_path, "Styles/*.scss")

    assert [path.name for path in result] == ["main.scss"]


def test_expand_nested_collects_one_level_below(tmp_path: Path) -> None:
    _touch(
        tmp_path,
        "Styles/top.scss",
        "Styles/mysite/x.scss",
        "Styles/other/y.scss",
        "Styles/other/_partial.scss",
        "Styles/other/deeper/z.scss",
    )

    result = expand_pattern(tmp_path, "Styles/*/*.scss", ignore_underscore=True)

    base = tmp_path / "Styles"
    assert result == [base / "mysite" / "x.scss", base / "other" / "y.scss"]


def test_expand_missing_directory_warns(tmp_path: Path, caplog) -> None:
    caplog.set_level(logging.WARNING, logger="vitex")

    assert expand_pattern(tmp_path, "Styles/*.scss") == []
    assert expand_pattern(tmp_path, "Styles/*/*.scss") == []

    messages = [record.getMessage() for record in caplog.records]
    assert "Directory not found for pattern Styles/*.scss" in messages
    assert "Directory not found for pattern Styles/*/*.scss" in messages


def test_expand_empty_nested_match_warns_once(tmp_path: Path, caplog) -> None:
    _touch(tmp_path, "Styles/a/readme.md", "Styles/b/readme.md")
    caplog.set_level(logging.WARNING, logger="vitex")

    assert expand_pattern(tmp_path, "Styles/*/*.scss") == []

    warnings = [r for r in caplog.records if "No files found" in r.getMessage()]
    assert len(warnings) == 1


def test_expand_accepts_windows_separators(tmp_path: Path) -> None:
    _touch(tmp_path, "JavaScript/app.js")

    result = expand_pattern(tmp_path, "JavaScript\\*.js")

    assert result == [tmp_path / "JavaScript" / "app.js"]


def test_expand_accepts_parsed_pattern(tmp_path: Path) -> None:
    _touch(tmp_path, "JavaScript/app.js")
    pattern = parse_pattern("JavaScript/*.js")

    assert expand_pattern(tmp_path, pattern) == [tmp_path / "JavaScript" / "app.js"]
