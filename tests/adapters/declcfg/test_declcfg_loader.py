from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

from depster.adapters.declcfg import load_declarative_config
from depster.domain.errors import DeclarativeConfigError
from tests.support.fbc import bundle_blob, channel_blob, package_blob, write_catalog

if TYPE_CHECKING:
    from pathlib import Path


def test_loads_blobs_by_schema(fbc_root: Path) -> None:
    cfg = load_declarative_config(fbc_root)

    assert [package.name for package in cfg.packages] == ["etcd", "prometheus"]
    assert [(channel.package, channel.name) for channel in cfg.channels] == [
        ("etcd", "alpha"),
        ("etcd", "stable"),
        ("prometheus", "beta"),
    ]
    assert len(cfg.bundles) == 5
    assert cfg.packages[0].default_channel == "stable"
    assert cfg.channels[1].entries[2].skips == ["etcdoperator.v0.9.3"]


def test_reads_concatenated_json_stream(tmp_path: Path) -> None:
    root = tmp_path / "catalog"
    root.mkdir()
    blobs = [
        package_blob("etcd", "alpha"),
        channel_blob("etcd", "alpha", [{"name": "etcdoperator.v0.6.1"}]),
        bundle_blob("etcd", "etcdoperator.v0.6.1", "0.6.1"),
    ]
    (root / "index.json").write_text(
        "\n".join(json.dumps(blob, indent=2) for blob in blobs), encoding="utf-8"
    )

    cfg = load_declarative_config(root)

    assert [bundle.name for bundle in cfg.bundles] == ["etcdoperator.v0.6.1"]


def test_walks_subdirectories_and_skips_hidden_entries(tmp_path: Path) -> None:
    root = tmp_path / "catalog"
    write_catalog(root / "etcd", [package_blob("etcd", "alpha")])
    write_catalog(root / ".git", [package_blob("hidden", "alpha")])
    write_catalog(root, [package_blob("ignored", "alpha")], filename=".draft.yaml")
    (root / "README.md").write_text("not a config file", encoding="utf-8")

    cfg = load_declarative_config(root)

    assert [package.name for package in cfg.packages] == ["etcd"]


def test_unknown_schema_is_kept_as_meta(tmp_path: Path) -> None:
    root = tmp_path / "catalog"
    write_catalog(
        root,
        [package_blob("etcd", "alpha"), {"schema": "custom.note", "package": "etcd", "text": "hi"}],
    )

    cfg = load_declarative_config(root)

    assert len(cfg.others) == 1
    assert cfg.others[0].schema == "custom.note"
    assert cfg.others[0].package == "etcd"
    assert cfg.others[0].blob["text"] == "hi"


@pytest.mark.parametrize(
    ("blob", "message"),
    [
        (["not", "an", "object"], "expected an object"),
        ({"name": "etcd"}, "missing a schema"),
        ({"schema": "olm.channel", "name": "alpha"}, "invalid olm.channel blob"),
    ],
)
def test_invalid_blob_names_file(tmp_path: Path, blob: Any, message: str) -> None:
    root = tmp_path / "catalog"
    path = write_catalog(root, [blob])

    with pytest.raises(DeclarativeConfigError, match=message) as excinfo:
        load_declarative_config(root)

    assert str(path) in str(excinfo.value)


def test_unparseable_file_is_reported(tmp_path: Path) -> None:
    root = tmp_path / "catalog"
    root.mkdir()
    (root / "broken.json").write_text("{oops", encoding="utf-8")

    with pytest.raises(DeclarativeConfigError, match="failed to parse"):
        load_declarative_config(root)


def test_root_must_be_a_directory(tmp_path: Path) -> None:
    with pytest.raises(DeclarativeConfigError, match="is not a directory"):
        load_declarative_config(tmp_path / "missing")


def test_invalid_utf8_file_is_reported(tmp_path: Path) -> None:
    root = tmp_path / "catalog"
    root.mkdir()
    path = root / "index.yaml"
    path.write_bytes(b"schema: olm.package\nname: \xff\n")

    with pytest.raises(DeclarativeConfigError, match="failed to decode") as excinfo:
        load_declarative_config(root)

    assert str(path) in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)
