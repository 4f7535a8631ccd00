from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from multirun.errors import ConfigurationError, GrepPatternError
from multirun.suites.chunks import chunk_count, create_chunks, flatten_files, split_files
from multirun.suites.discovery import find_files


def _make_tests(root: Path, names: List[str], body: str = "") -> List[str]:
    paths = []
    for name in names:
        p = root / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(body or f"Scenario('{name}', () => {{}});\n", encoding="utf-8")
        paths.append(str(p))
    return paths


@pytest.mark.parametrize(
    "count,size,expected_sizes",
    [
        (5, 2, [2, 2, 1]),
        (4, 2, [2, 2]),
        (3, 1, [1, 1, 1]),
        (2, 5, [2]),
        (0, 3, []),
    ],
)
def test_split_files_sizes(count: int, size: int, expected_sizes: List[int]) -> None:
    files = [f"f{i}" for i in range(count)]
    assert [len(g) for g in split_files(files, size)] == expected_sizes


def test_split_files_is_contiguous_and_leaves_input_untouched() -> None:
    files = ["a", "b", "c", "d", "e"]
    groups = split_files(files, 2)

    assert groups == [["a", "b"], ["c", "d"], ["e"]]
    assert files == ["a", "b", "c", "d", "e"]


def test_split_files_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        split_files(["a"], 0)


def test_flatten_files() -> None:
    assert flatten_files(["a.js"]) == "a.js"
    assert flatten_files(["a.js", "b.js", "c.js"]) == "{a.js,b.js,c.js}"
    assert flatten_files([]) == ""


@pytest.mark.parametrize(
    "value,expected",
    [(3, 3), (2.5, 2.5), ("4", 4.0), (0, None), (-1, None), (True, None), (None, None), ("x", None), (float("inf"), None)],
)
def test_chunk_count(value, expected) -> None:
    assert chunk_count(value) == expected


def test_create_chunks_balanced_split(tmp_path: Path) -> None:
    files = _make_tests(tmp_path, [f"t{i}.test.js" for i in range(1, 6)])
    config = {"chunks": 3, "browsers": ["chrome"], "timeout": 10}

    chunks = create_chunks(config, str(tmp_path / "*.test.js"))

    assert [c["tests"] for c in chunks] == [
        "{" + ",".join(files[0:2]) + "}",
        "{" + ",".join(files[2:4]) + "}",
        files[4],
    ]
    for c in chunks:
        assert "chunks" not in c
        assert c["timeout"] == 10
        assert c["browsers"] == ["chrome"]
    # The suite definition is left as it was.
    assert config == {"chunks": 3, "browsers": ["chrome"], "timeout": 10}


def test_create_chunks_covers_every_file_exactly_once(tmp_path: Path) -> None:
    files = _make_tests(tmp_path, [f"case{i:02d}_test.js" for i in range(11)])

    chunks = create_chunks({"chunks": 4}, str(tmp_path / "*_test.js"))

    seen: List[str] = []
    for c in chunks:
        tests = c["tests"]
        seen.extend(tests[1:-1].split(",") if tests.startswith("{") else [tests])
    assert seen == files


def test_create_chunks_with_more_chunks_than_files(tmp_path: Path) -> None:
    files = _make_tests(tmp_path, ["a_test.js", "b_test.js"])

    chunks = create_chunks({"chunks": 5}, str(tmp_path / "*_test.js"))

    assert [c["tests"] for c in chunks] == files


def test_create_chunks_with_no_files_yields_nothing(tmp_path: Path) -> None:
    assert create_chunks({"chunks": 3}, str(tmp_path / "*_test.js")) == []


def test_create_chunks_applies_grep_before_splitting(tmp_path: Path) -> None:
    smoke = _make_tests(tmp_path, ["a_test.js", "c_test.js"], body="Scenario('works @smoke', () => {});\n")
    _make_tests(tmp_path, ["b_test.js"], body="Scenario('slow path', () => {});\n")

    chunks = create_chunks({"chunks": 2, "grep": "@smoke"}, str(tmp_path / "*_test.js"))

    assert [c["tests"] for c in chunks] == smoke
    assert all(c["grep"] == "@smoke" for c in chunks)


def test_create_chunks_bad_grep_fails_even_without_files(tmp_path: Path) -> None:
    with pytest.raises(GrepPatternError):
        create_chunks({"chunks": 2, "grep": "(unclosed"}, str(tmp_path / "*_test.js"))


def test_create_chunks_accepts_pattern_lists(tmp_path: Path) -> None:
    a = _make_tests(tmp_path / "a", ["one_test.js"])
    b = _make_tests(tmp_path / "b", ["two_test.js"])

    chunks = create_chunks({"chunks": 1}, [str(tmp_path / "a" / "*.js"), None, str(tmp_path / "b" / "*.js")])

    assert chunks == [{"tests": "{" + f"{a[0]},{b[0]}" + "}"}]


def test_create_chunks_with_custom_splitter(tmp_path: Path) -> None:
    files = _make_tests(tmp_path, ["a_test.js", "b_test.js", "c_test.js"])

    def one_file_per_chunk(found: List[str]) -> List[List[str]]:
        return [[f] for f in reversed(found)]

    chunks = create_chunks({"chunks": one_file_per_chunk}, str(tmp_path / "*_test.js"))

    assert [c["tests"] for c in chunks] == list(reversed(files))


def test_create_chunks_rejects_unusable_chunk_values(tmp_path: Path) -> None:
    _make_tests(tmp_path, ["a_test.js"])
    with pytest.raises(ConfigurationError):
        create_chunks({"chunks": {"n": 2}}, str(tmp_path / "*_test.js"))


def test_create_chunks_routes_feature_files_to_gherkin(tmp_path: Path) -> None:
    js = _make_tests(tmp_path, ["a_test.js"])
    features = _make_tests(tmp_path, ["login.feature", "signup.feature"], body="Feature: Login\n")

    chunks = create_chunks(
        {"chunks": 1, "gherkin": {"steps": ["./steps.js"]}},
        [str(tmp_path / "*_test.js"), str(tmp_path / "*.feature")],
    )

    assert len(chunks) == 1
    assert chunks[0]["tests"] == js[0]
    assert chunks[0]["gherkin"] == {"steps": ["./steps.js"], "features": "{" + ",".join(features) + "}"}


def test_chunk_patterns_resolve_back_to_files_with_glob_characters(tmp_path: Path) -> None:
    files = _make_tests(tmp_path, ["[x]_test.js", "b_test.js"])

    (chunk,) = create_chunks({"chunks": 1}, [str(tmp_path / "*_test.js")])

    assert sorted(find_files(chunk["tests"])) == sorted(files)
