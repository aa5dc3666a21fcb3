"""Tests for loading and dumping YAML/JSON documents."""

import json as _json
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest
import yaml as _yaml

import pathmap
import pathmap.documents as documents
import pathmap.errors as errors

WriteFile = _typing.Callable[[str, str], _pathlib.Path]


class TestFormatForPath:
    """Tests for format_for_path()."""

    @_pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("config.json", "json"),
            ("CONFIG.JSON", "json"),
            ("config.yaml", "yaml"),
            ("config.yml", "yaml"),
            ("config", "yaml"),
        ],
    )
    def test_suffix(self, name: str, expected: str) -> None:
        """Only .json selects JSON."""
        assert documents.format_for_path(name) == expected


class TestLoadDocument:
    """Tests for load_document()."""

    def test_load_yaml(self, write_file: WriteFile) -> None:
        """YAML files load as nested mappings."""
        path = write_file("doc.yaml", "server:\n  port: 8080\n  hosts: [a, b]\n")

        assert documents.load_document(path) == {"server": {"port": 8080, "hosts": ["a", "b"]}}

    def test_load_json(self, write_file: WriteFile) -> None:
        """JSON files load as nested mappings."""
        path = write_file("doc.json", '{"a": {"b": [1, 2]}}')

        assert documents.load_document(path) == {"a": {"b": [1, 2]}}

    def test_load_top_level_list(self, write_file: WriteFile) -> None:
        """A top-level list is a valid document."""
        path = write_file("list.yaml", "- a\n- b\n")

        assert documents.load_document(path) == ["a", "b"]

    def test_empty_document_is_empty_dict(self, write_file: WriteFile) -> None:
        """Empty files load as {}."""
        assert documents.load_document(write_file("empty.yaml", "")) == {}
        assert documents.load_document(write_file("blank.json", "  \n")) == {}

    def test_missing_file(self, tmp_path: _pathlib.Path) -> None:
        """Unreadable files raise DocumentError."""
        with _pytest.raises(errors.DocumentError, match="cannot read file"):
            documents.load_document(tmp_path / "missing.yaml")

    def test_invalid_utf8(self, tmp_path: _pathlib.Path) -> None:
        """Undecodable bytes raise DocumentError, not UnicodeDecodeError."""
        path = tmp_path / "latin.yaml"
        path.write_bytes(b"key: \xff\xfe\n")

        with _pytest.raises(errors.DocumentError, match="not valid UTF-8"):
            documents.load_document(path)

    def test_invalid_yaml(self, write_file: WriteFile) -> None:
        """Malformed YAML raises DocumentError naming the format."""
        path = write_file("bad.yaml", "key: [unclosed\n")

        with _pytest.raises(errors.DocumentError, match="invalid YAML") as exc_info:
            documents.load_document(path)

        assert exc_info.value.path == path

    def test_invalid_json(self, write_file: WriteFile) -> None:
        """Malformed JSON raises DocumentError naming the format."""
        path = write_file("bad.json", "{not json")

        with _pytest.raises(errors.DocumentError, match="invalid JSON"):
            documents.load_document(path)

    def test_scalar_document_rejected(self, write_file: WriteFile) -> None:
        """A document must be a mapping or list."""
        path = write_file("scalar.yaml", "42\n")

        with _pytest.raises(errors.DocumentError, match="got int"):
            documents.load_document(path)


class TestLoadDocuments:
    """Tests for load_documents()."""

    def test_later_files_win(self, write_file: WriteFile) -> None:
        """Documents are deep merged in order."""
        base = write_file("base.yaml", "server:\n  host: localhost\n  port: 80\n")
        local = write_file("local.json", '{"server": {"port": 8080}}')

        result = documents.load_documents(base, local)

        assert result == {"server": {"host": "localhost", "port": 8080}}

    def test_any_failure_fails_all(self, write_file: WriteFile) -> None:
        """One bad file fails the whole load."""
        good = write_file("good.yaml", "a: 1\n")
        bad = write_file("bad.yaml", "- [\n")

        with _pytest.raises(errors.DocumentError):
            documents.load_documents(good, bad)


class TestDumpAndWrite:
    """Tests for dump_document() and write_document()."""

    def test_dump_json(self) -> None:
        """JSON output is indented and newline-terminated."""
        text = documents.dump_document({"b": 1, "a": [1]}, "json")

        assert text.endswith("\n")
        assert _json.loads(text) == {"b": 1, "a": [1]}
        assert text.index('"b"') < text.index('"a"')

    def test_dump_yaml_keeps_order(self) -> None:
        """YAML output does not sort keys."""
        text = documents.dump_document({"b": 1, "a": 2})

        assert text == "b: 1\na: 2\n"

    def test_write_uses_suffix(self, tmp_path: _pathlib.Path) -> None:
        """write_document picks the format from the target suffix."""
        json_path = tmp_path / "out.json"
        yaml_path = tmp_path / "out.yaml"

        documents.write_document(json_path, {"a": {"b": 1}})
        documents.write_document(yaml_path, {"a": {"b": 1}})

        assert _json.loads(json_path.read_text()) == {"a": {"b": 1}}
        assert _yaml.safe_load(yaml_path.read_text()) == {"a": {"b": 1}}

    def test_write_then_load(self, tmp_path: _pathlib.Path) -> None:
        """A written document loads back equal."""
        path = tmp_path / "doc.yaml"
        data = {"name": "ünïcode", "items": [1, {"k": None}]}

        documents.write_document(path, data)

        assert documents.load_document(path) == data

    def test_write_unserializable_yaml(self, tmp_path: _pathlib.Path) -> None:
        """Objects YAML cannot represent raise DocumentError."""
        with _pytest.raises(errors.DocumentError, match="cannot serialize"):
            documents.write_document(tmp_path / "out.yaml", {"a": object()})

    def test_package_exports(self) -> None:
        """The top-level package re-exports the document functions."""
        assert pathmap.load_document is documents.load_document
        assert pathmap.load_documents is documents.load_documents
        assert pathmap.dump_document is documents.dump_document
        assert pathmap.write_document is documents.write_document

    def test_write_to_missing_directory(self, tmp_path: _pathlib.Path) -> None:
        """Write failures raise DocumentError."""
        with _pytest.raises(errors.DocumentError, match="cannot write file"):
            documents.write_document(tmp_path / "nope" / "out.yaml", {"a": 1})
