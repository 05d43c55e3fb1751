from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

import unique_id.engine as engine
from unique_id.engine import create_id
from unique_id.errors import ConfigError, ManifestParseError, UniqueIdError
from unique_id.hashing import short_hash
from unique_id.options import ID_STRING_KEY
from unique_id.session import FileSession


def _write_package(root: Path, **fields: object) -> None:
    root.mkdir(parents=True, exist_ok=True)
    (root / "package.json").write_text(json.dumps(fields), encoding="utf-8")


def _file_session(root: Path, relative_path: str, source: str = "foo();") -> FileSession:
    path = root / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source, encoding="utf-8")
    return FileSession(source_text=source, file_path=str(path))


def test_code_hash_used_without_file_path() -> None:
    session = FileSession(source_text="foo();")

    assert create_id(session) == "AcQ5z4Sv"
    assert (
        session.get(ID_STRING_KEY)
        == "code:qMVaiPhbudnaz91QqECVnbdTvKWnqeultnb/Nt/ybo8="
    )


def test_each_call_gets_a_different_id() -> None:
    session = FileSession(source_text="foo();bar();")

    assert create_id(session) == "SMKDpy00"
    assert create_id(session) == "CRLVr5wz"


def test_ids_are_unique_within_a_file() -> None:
    session = FileSession(source_text="x = 1\n")

    ids = [create_id(session) for _ in range(1000)]

    assert len(set(ids)) == len(ids)


def test_same_input_gives_same_sequence_across_sessions() -> None:
    first = FileSession(source_text="foo();bar();")
    second = FileSession(source_text="foo();bar();")

    assert [create_id(first, id_length=16) for _ in range(5)] == [
        create_id(second, id_length=16) for _ in range(5)
    ]


def test_path_relative_to_package_root(tmp_path: Path) -> None:
    _write_package(tmp_path, name="app")

    foo = _file_session(tmp_path, "test/foo.js")
    bar = _file_session(tmp_path, "test/bar.js", "foo();bar();")

    assert create_id(foo) == "DxNA_4Ob"
    assert foo.get(ID_STRING_KEY) == "path:test/foo.js"
    assert [create_id(bar), create_id(bar)] == ["CBaVcMlU", "Cn86cOWC"]


def test_path_ids_do_not_depend_on_source_text(tmp_path: Path) -> None:
    _write_package(tmp_path, name="app")

    first = _file_session(tmp_path, "test/foo.js", "foo();")
    second = FileSession(source_text="bar();", file_path=first.file_path)

    assert create_id(first) == create_id(second) == "DxNA_4Ob"


def test_package_name_and_version_from_descriptor(tmp_path: Path) -> None:
    _write_package(tmp_path, name="app", version="1.2.3")
    session = _file_session(tmp_path, "lib/index.js")

    result = create_id(session, is_package=True)

    assert session.get(ID_STRING_KEY) == "package:app@1.2.3:lib/index.js"
    assert result == short_hash("package:app@1.2.3:lib/index.js:0", 8)


def test_explicit_package_name_and_version(tmp_path: Path) -> None:
    _write_package(tmp_path, name="app", version="1.2.3")
    session = _file_session(tmp_path, "lib/index.js")

    create_id(
        session,
        {"is_package": True, "package_name": "other", "package_version": "9.0.0"},
    )

    assert session.get(ID_STRING_KEY) == "package:other@9.0.0:lib/index.js"


def test_explicit_root_path_skips_search(tmp_path: Path) -> None:
    _write_package(tmp_path, name="app", version="1.0.0")
    session = _file_session(tmp_path, "packages/sub/lib/index.js")

    create_id(session, root_path=str(tmp_path / "packages"))

    assert session.get(ID_STRING_KEY) == "path:sub/lib/index.js"


def test_explicit_root_path_with_trailing_separator(tmp_path: Path) -> None:
    session = _file_session(tmp_path, "test/foo.js")

    assert create_id(session, root_path=str(tmp_path) + os.sep) == "DxNA_4Ob"


def test_explicit_root_path_reads_package_version(tmp_path: Path) -> None:
    _write_package(tmp_path, name="app", version="1.0.0")
    session = _file_session(tmp_path, "lib/index.js")

    create_id(session, root_path=str(tmp_path), is_package=True)

    assert session.get(ID_STRING_KEY) == "package:app@1.0.0:lib/index.js"


def test_explicit_root_path_without_descriptor_is_fatal(tmp_path: Path) -> None:
    session = _file_session(tmp_path, "lib/index.js")

    with pytest.raises(ConfigError, match="expected a package.json"):
        create_id(session, root_path=str(tmp_path), is_package=True)


@pytest.mark.parametrize(
    ("fields", "message"),
    [
        ({"name": "app"}, "does not contain a version field"),
        ({"name": "app", "version": ""}, "does not contain a version field"),
        ({"name": 123, "version": "1.0.0"}, "non-string name field"),
        ({"name": "app", "version": 1}, "non-string version field"),
    ],
)
def test_invalid_descriptor_is_fatal_when_package_requested(
    tmp_path: Path, fields: dict[str, object], message: str
) -> None:
    _write_package(tmp_path, **fields)
    session = _file_session(tmp_path, "lib/index.js")

    with pytest.raises(ConfigError, match=f"^my-plugin: .*{message}"):
        create_id(session, is_package=True, plugin_name="my-plugin")


def test_invalid_descriptor_ignored_when_package_not_requested(tmp_path: Path) -> None:
    _write_package(tmp_path, name="app", version=1)
    session = _file_session(tmp_path, "lib/index.js")

    create_id(session)

    assert session.get(ID_STRING_KEY) == "path:lib/index.js"


def test_malformed_descriptor_propagates(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text("{", encoding="utf-8")
    session = _file_session(tmp_path, "index.js")

    with pytest.raises(ManifestParseError):
        create_id(session)


def test_descriptor_with_invalid_utf8_raises_unique_id_error(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_bytes(b'{"name": "\xff"}')
    session = _file_session(tmp_path, "index.js")

    with pytest.raises(UniqueIdError, match="Invalid JSON"):
        create_id(session)


def test_falls_back_to_code_when_no_package_root(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(engine, "find_package_root", lambda path: None)
    session = FileSession(source_text="foo();", file_path="/nowhere/test/foo.js")

    assert create_id(session) == "AcQ5z4Sv"


def test_id_string_resolved_once_per_session(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_package(tmp_path, name="app")
    calls: list[str] = []
    original = engine.find_package_root

    def _counting_find(path: str) -> object:
        calls.append(path)
        return original(path)

    monkeypatch.setattr(engine, "find_package_root", _counting_find)
    session = _file_session(tmp_path, "test/foo.js")

    for _ in range(3):
        create_id(session)

    assert calls == [session.file_path]


def test_counter_keys_are_independent() -> None:
    session = FileSession(source_text="foo();bar();")

    assert create_id(session, counter_key="other") == "SMKDpy00"
    assert create_id(session) == "SMKDpy00"
    assert create_id(session, counter_key="other") == "CRLVr5wz"
    assert create_id(session) == "CRLVr5wz"
    assert session.get("other") == 2


@pytest.mark.skipif(os.sep == "\\", reason="Backslash is the native separator.")
def test_backslash_separators_normalized(tmp_path: Path) -> None:
    session = FileSession(
        source_text="foo();",
        file_path=f"{tmp_path}/test\\foo.js",
    )

    assert create_id(session, root_path=str(tmp_path)) == "DxNA_4Ob"
    assert session.get(ID_STRING_KEY) == "path:test/foo.js"


@pytest.mark.parametrize("id_length", [1, 8, 41])
def test_id_length(id_length: int) -> None:
    result = create_id(FileSession(source_text="foo();"), id_length=id_length)

    assert len(result) == id_length
    assert not result[0].isdigit()


def test_invalid_options_raise_before_session_is_touched() -> None:
    session = FileSession(source_text="foo();")

    with pytest.raises(ConfigError):
        create_id(session, id_length=42)

    assert session.get(ID_STRING_KEY) is None
