"""Tests for metadata models and MetadataStore.

Run with: uv run pytest registry/services/tests/unit/test_metadata_store.py
"""

import json
import os
import stat

import pytest
from pydantic import ValidationError

from registry.services.metadata import AppSummary, DappMeta, MetadataStore
from registry.services.tests.catalog_data import (
    VALID_META_DATA_1,
    VALID_META_DATA_2,
    make_meta,
    read_json,
    write_entry,
)


# -----------------------------------------------------------------------------
# DappMeta schema
# -----------------------------------------------------------------------------


@pytest.mark.unit
class TestDappMetaSchema:
    """Accepted and rejected metadata shapes."""

    def test_valid_documents_parse(self):
        meta = DappMeta.model_validate(VALID_META_DATA_1)
        assert meta.slug == "dapp1"
        assert meta.logo_url == "https://example.com/logo1.png"
        assert meta.content.page_title == "DApp One | Registry"

    def test_source_absent_stays_absent(self):
        meta = DappMeta.model_validate(VALID_META_DATA_1)
        assert meta.source is None

    def test_source_fully_scraped_defaults_true(self):
        meta = DappMeta.model_validate(make_meta(source={}))
        assert meta.source is not None
        assert meta.source.fully_scraped is True

    def test_source_fully_scraped_explicit(self):
        meta = DappMeta.model_validate(VALID_META_DATA_2)
        assert meta.source.fully_scraped is False

    def test_short_over_160_rejected(self):
        data = make_meta()
        data["content"]["short"] = "x" * 161
        with pytest.raises(ValidationError) as exc_info:
            DappMeta.model_validate(data)
        assert any(e["loc"] == ("content", "short") for e in exc_info.value.errors())

    def test_meta_at_160_accepted(self):
        data = make_meta()
        data["content"]["meta"] = "x" * 160
        assert DappMeta.model_validate(data).content.meta == "x" * 160

    def test_website_required(self):
        with pytest.raises(ValidationError) as exc_info:
            DappMeta.model_validate(make_meta(links={"github": "https://github.com/x"}))
        assert any(e["loc"] == ("links", "website") for e in exc_info.value.errors())

    def test_malformed_link_rejected(self):
        with pytest.raises(ValidationError):
            DappMeta.model_validate(
                make_meta(links={"website": "https://ok.example.com", "docs": "not a url"})
            )

    def test_link_string_kept_verbatim(self):
        meta = DappMeta.model_validate(make_meta(links={"website": "https://Example.com"}))
        assert meta.links.website == "https://Example.com"

    def test_missing_relations_rejected(self):
        data = make_meta()
        del data["relations"]
        with pytest.raises(ValidationError):
            DappMeta.model_validate(data)

    def test_link_channels_in_order(self):
        meta = DappMeta.model_validate(VALID_META_DATA_2)
        assert meta.links.channels() == [
            ("website", "https://dapp2.example.com"),
            ("github", "https://github.com/example/dapp2"),
        ]


# -----------------------------------------------------------------------------
# AppSummary
# -----------------------------------------------------------------------------


@pytest.mark.unit
class TestAppSummary:
    """Projection of metadata into apps.min.json entries."""

    def test_from_meta_projects_fields(self):
        meta = DappMeta.model_validate(VALID_META_DATA_2)
        summary = AppSummary.from_meta(meta, "https://cdn.example.com/logo")
        data = summary.to_json()

        assert set(data) == {
            "slug", "name", "logoUrl", "category", "chains",
            "tags", "pricing", "short", "updatedAt",
        }
        assert data["logoUrl"] == "https://cdn.example.com/logo"
        assert data["short"] == VALID_META_DATA_2["content"]["short"]
        assert data["chains"] == ["polygon", "ethereum"]

    def test_updated_at_is_iso_utc(self):
        meta = DappMeta.model_validate(VALID_META_DATA_1)
        data = AppSummary.from_meta(meta, meta.logo_url).to_json()
        assert data["updatedAt"].endswith("Z")
        assert "T" in data["updatedAt"]


# -----------------------------------------------------------------------------
# MetadataStore
# -----------------------------------------------------------------------------


@pytest.mark.unit
class TestMetadataStore:
    """Reading and rewriting entries on disk."""

    def test_list_slugs_sorted_dirs_only(self, apps_dir):
        write_entry(apps_dir, "zeta", make_meta(slug="zeta"))
        write_entry(apps_dir, "alpha", make_meta(slug="alpha"))
        (apps_dir / ".DS_Store").write_text("", encoding="utf-8")

        assert MetadataStore(apps_dir).list_slugs() == ["alpha", "zeta"]

    def test_list_slugs_missing_dir_raises(self, temp_dir):
        with pytest.raises(OSError):
            MetadataStore(temp_dir / "nope").list_slugs()

    def test_read_valid(self, apps_dir):
        write_entry(apps_dir, "dapp1", VALID_META_DATA_1)
        meta = MetadataStore(apps_dir).read("dapp1")
        assert meta.name == "DApp One"

    def test_read_invalid_json(self, apps_dir):
        write_entry(apps_dir, "broken", "{not json")
        with pytest.raises(json.JSONDecodeError):
            MetadataStore(apps_dir).read("broken")

    def test_read_missing_file(self, apps_dir):
        (apps_dir / "empty").mkdir()
        with pytest.raises(OSError):
            MetadataStore(apps_dir).read("empty")

    def test_logo_source_local_and_remote(self, apps_dir):
        store = MetadataStore(apps_dir)
        assert store.logo_source("dapp2", "./logo.png") == str(apps_dir / "dapp2" / "./logo.png")
        assert store.logo_source("dapp1", "https://x.example/l.png") == "https://x.example/l.png"

    def test_update_logo_url_rewrites_only_logo(self, apps_dir):
        data = make_meta(VALID_META_DATA_2, extraField={"kept": True})
        meta_path = write_entry(apps_dir, "dapp2", data)
        store = MetadataStore(apps_dir)

        assert store.update_logo_url("dapp2", "https://cdn.example.com/dapp2") is True

        rewritten = read_json(meta_path)
        assert rewritten["logoUrl"] == "https://cdn.example.com/dapp2"
        assert rewritten["extraField"] == {"kept": True}
        assert rewritten["source"] == {"fullyScraped": False}
        assert {k: v for k, v in rewritten.items() if k != "logoUrl"} == {
            k: v for k, v in data.items() if k != "logoUrl"
        }

    def test_update_logo_url_same_value_is_noop(self, apps_dir):
        meta_path = write_entry(apps_dir, "dapp1", VALID_META_DATA_1)
        before = meta_path.read_text(encoding="utf-8")

        changed = MetadataStore(apps_dir).update_logo_url("dapp1", VALID_META_DATA_1["logoUrl"])

        assert changed is False
        assert meta_path.read_text(encoding="utf-8") == before

    def test_update_leaves_no_temp_files(self, apps_dir):
        write_entry(apps_dir, "dapp1", VALID_META_DATA_1)
        MetadataStore(apps_dir).update_logo_url("dapp1", "https://cdn.example.com/new")
        assert sorted(p.name for p in (apps_dir / "dapp1").iterdir()) == ["meta.json"]

    @pytest.mark.parametrize("mode", [0o644, 0o640])
    def test_update_keeps_file_mode(self, apps_dir, mode):
        meta_path = write_entry(apps_dir, "dapp1", VALID_META_DATA_1)
        os.chmod(meta_path, mode)

        MetadataStore(apps_dir).update_logo_url("dapp1", "https://cdn.example.com/new")

        assert stat.S_IMODE(meta_path.stat().st_mode) == mode
