from __future__ import annotations

import json
import logging
from pathlib import Path

from jspm_bundler.bundle.manifest import (
    dump_manifest,
    load_manifest,
    merge_manifest,
    parse_manifest,
    prune_manifest,
    render_manifest,
)
from jspm_bundler.bundle.sequencer import BuildFailure, BuiltBundle
from jspm_bundler.schemas.manifest import BundleManifest


def _sample() -> BundleManifest:
    return BundleManifest(
        bundles={"bundles/app/app.js": ["app/main.js", "app/util.js"]},
        chksums={"bundles/app/app.js": "abc123"},
    )


def test_render_emits_loader_module() -> None:
    text = render_manifest(_sample())
    assert text.startswith("(function(module){\n")
    assert "  var chksums = module.exports.chksums = {\n\t\"bundles/app/app.js\": \"abc123\"\n};\n" in text
    assert "  System.config({bundles: bundles});\n" in text
    assert text.endswith('})((typeof module !== "undefined") ? module : {exports: {}});')


def test_render_empty_manifest() -> None:
    text = render_manifest(None)
    assert "module.exports.chksums = {};" in text
    assert "module.exports.bundles = {};" in text
    assert parse_manifest(text).is_empty()


def test_dump_and_load_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "bundles.js"
    manifest = _sample()
    dump_manifest(manifest, path)
    loaded = load_manifest(path)
    assert loaded.model_dump() == manifest.model_dump()


def test_load_accepts_plain_json(tmp_path: Path) -> None:
    path = tmp_path / "bundles.json"
    path.write_text(json.dumps({"bundles": {"a.js": ["a"]}, "chksums": {"a.js": "1"}, "extra": 1}), encoding="utf-8")
    assert load_manifest(path).bundles == {"a.js": ["a"]}


def test_load_missing_manifest_warns_and_returns_empty(tmp_path: Path, caplog) -> None:
    with caplog.at_level(logging.WARNING):
        manifest = load_manifest(tmp_path / "bundles.js")
    assert manifest.is_empty()
    assert "Unable to read bundle manifest" in caplog.text


def test_load_corrupt_manifest_returns_empty(tmp_path: Path) -> None:
    path = tmp_path / "bundles.js"
    path.write_text("module.exports.chksums = {not json", encoding="utf-8")
    assert load_manifest(path).is_empty()


def test_merge_is_idempotent() -> None:
    bundles = [
        BuiltBundle(path="bundles/a.js", modules=["a"]),
        BuiltBundle(path="bundles/b.js", modules=["b"]),
    ]
    chksums = {"bundles/a.js": "1"}
    once = merge_manifest(_sample(), bundles, chksums)
    twice = merge_manifest(once, bundles, chksums)
    assert once == twice
    assert once.chksums["bundles/b.js"] == ""
    assert once.bundles["bundles/app/app.js"] == ["app/main.js", "app/util.js"]


def test_merge_overwrites_by_path_and_ignores_failures() -> None:
    bundles = [
        BuiltBundle(path="bundles/app/app.js", modules=["app/main.js"]),
        BuildFailure(name="x", expression="x", error="boom"),
    ]
    original = _sample()
    merged = merge_manifest(original, bundles, {"bundles/app/app.js": "def456"})
    assert merged.bundles == {"bundles/app/app.js": ["app/main.js"]}
    assert merged.chksums == {"bundles/app/app.js": "def456"}
    assert original.chksums["bundles/app/app.js"] == "abc123"


def test_prune_is_idempotent_and_ignores_unknown_paths() -> None:
    pruned = prune_manifest(_sample(), ["bundles/app/app.js", "bundles/nope.js"])
    assert pruned.is_empty()
    assert prune_manifest(pruned, ["bundles/app/app.js", "bundles/nope.js"]) == pruned


def test_manifest_fixture_valid() -> None:
    fixture = Path(__file__).parent / "fixtures" / "sample_manifest.js"
    manifest = load_manifest(fixture)
    assert manifest.bundles["bundles/app/app.js"] == ["app/main.js", "app/util.js"]
    assert manifest.chksums["bundles/app/app.js"].startswith("012345")
    assert manifest.chksums["bundles/home.js"] == ""
    assert render_manifest(manifest) == fixture.read_text(encoding="utf-8")
