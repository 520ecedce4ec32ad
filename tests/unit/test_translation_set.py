"""
TranslationSet unit tests

Tests provenance edge recording, prefixing and merging
"""

import pytest

from provtrans.core.path import ContextPath
from provtrans.core.translation import TranslationKind, TranslationSet
from provtrans.schema import destination as dst


def yaml_path(*segments):
    return ContextPath.new("yaml", *segments)


def json_path(*segments):
    return ContextPath.new("json", *segments)


class TestTranslationSet:
    """Test edge bookkeeping"""

    def test_add_translation(self):
        ts = TranslationSet("yaml", "json")
        ts.add_translation(yaml_path("a"), json_path("b"))
        t = ts.get(json_path("b"))
        assert t.from_path == yaml_path("a")
        assert t.kind == TranslationKind.VALUE
        assert len(ts) == 1

    def test_tag_mismatch_rejected(self):
        ts = TranslationSet("yaml", "json")
        with pytest.raises(ValueError):
            ts.add_translation(json_path("a"), json_path("b"))

    def test_add_identity(self):
        ts = TranslationSet("yaml", "json")
        ts.add_identity("path", "mode")
        t = ts.get(json_path("mode"))
        assert t.from_path == yaml_path("mode")
        assert t.kind == TranslationKind.IDENTITY

    def test_prefixed(self):
        """Source and destination prefixes can differ"""
        ts = TranslationSet("yaml", "json")
        ts.add_translation(yaml_path("size_mib"), json_path("sizeMiB"))
        p = ts.prefixed(("partitions", 0), ("partitions", 0))
        t = p.get(json_path("partitions", 0, "sizeMiB"))
        assert t.from_path == yaml_path("partitions", 0, "size_mib")

    def test_merge_union(self):
        a = TranslationSet("yaml", "json")
        a.add_translation(yaml_path("a"), json_path("a"))
        b = TranslationSet("yaml", "json")
        b.add_translation(yaml_path("b"), json_path("b"))
        r = a.merge(b)
        assert r.is_empty()
        assert len(a) == 2

    def test_merge_same_edge_is_not_conflict(self):
        a = TranslationSet("yaml", "json")
        a.add_translation(yaml_path("a"), json_path("a"))
        b = TranslationSet("yaml", "json")
        b.add_translation(yaml_path("a"), json_path("a"))
        assert a.merge(b).is_empty()

    def test_merge_conflict_reported(self):
        """Two origins for one destination are flagged, not overwritten"""
        a = TranslationSet("yaml", "json")
        a.add_translation(yaml_path("a"), json_path("x"))
        b = TranslationSet("yaml", "json")
        b.add_translation(yaml_path("b"), json_path("x"))
        r = a.merge(b)
        assert r.has_errors()
        assert r.entries[0].path == yaml_path("b")
        assert a.get(json_path("x")).from_path == yaml_path("a")

    def test_update_overrides(self):
        a = TranslationSet("yaml", "json")
        a.add_translation(yaml_path("a"), json_path("x"))
        b = TranslationSet("yaml", "json")
        b.add_translation(yaml_path("b"), json_path("x"))
        a.update(b)
        assert a.get(json_path("x")).from_path == yaml_path("b")

    def test_add_from_common_source(self):
        """Every set field of a synthesized record traces to one source"""
        ts = TranslationSet("yaml", "json")
        unit = dst.Unit(name="var.mount", enabled=True, contents="[Mount]")
        common = yaml_path("storage", "filesystems", 0, "with_mount_unit")
        ts.add_from_common_source(common, json_path("systemd", "units", 3), unit)

        for segs in [(), ("name",), ("enabled",), ("contents",)]:
            t = ts.get(json_path("systemd", "units", 3, *segs))
            assert t is not None
            assert t.from_path == common
        assert json_path("systemd", "units", 3, "mask") not in ts

    def test_add_from_common_source_uses_aliases(self):
        ts = TranslationSet("yaml", "json")
        part = dst.Partition(size_mib=10)
        ts.add_from_common_source(yaml_path("x"), json_path("p"), part)
        assert json_path("p", "sizeMiB") in ts
