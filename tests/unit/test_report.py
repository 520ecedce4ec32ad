"""
Report unit tests

Tests severity handling, fatality and merging of diagnostics
"""

from provtrans.core.path import ContextPath
from provtrans.core.report import Report, Severity
from provtrans.exceptions.errors import ErrNodeExists


class TestReport:
    """Test diagnostics ledger"""

    def test_empty_report(self):
        r = Report()
        assert r.is_empty()
        assert not r.has_errors()
        assert not r.is_fatal()

    def test_add_on_error_ignores_none(self):
        """A None error is not recorded"""
        r = Report()
        r.add_on_error(ContextPath.new("yaml", "a"), None)
        assert r.is_empty()

    def test_error_is_not_fatal(self):
        """Per-entry errors fail the run without aborting it"""
        r = Report()
        r.add_on_error(ContextPath.new("yaml", "a"), ErrNodeExists)
        assert r.has_errors()
        assert not r.is_fatal()
        assert r.entries[0].message == ErrNodeExists.message

    def test_fatal(self):
        r = Report()
        r.add_on_fatal(ContextPath.new("yaml", "a"), "no files dir")
        assert r.is_fatal()
        assert r.has_errors()

    def test_warning_is_not_error(self):
        r = Report()
        r.add_on_warning(ContextPath.new("yaml", "a"), "heads up")
        assert r.has_warnings()
        assert not r.has_errors()
        assert r.entries[0].severity == Severity.WARNING

    def test_exception_message(self):
        """OS errors are rendered through str()"""
        r = Report()
        r.add_on_error(ContextPath.new("yaml"), FileNotFoundError(2, "No such file", "x"))
        assert "No such file" in r.entries[0].message

    def test_merge_preserves_order(self):
        a = Report()
        a.add_on_error(ContextPath.new("yaml", "a"), "first")
        b = Report()
        b.add_on_warning(ContextPath.new("yaml", "b"), "second")
        b.add_on_error(ContextPath.new("yaml", "c"), "third")
        a.merge(b)
        assert [e.message for e in a] == ["first", "second", "third"]

    def test_prefixed(self):
        """Prefixing re-roots every entry and keeps fatality"""
        r = Report()
        r.add_on_fatal(ContextPath.new("yaml", "local"), "missing")
        p = r.prefixed("storage", "files", 0, "contents")
        assert p.entries[0].path == ContextPath.new("yaml", "storage", "files", 0, "contents", "local")
        assert p.is_fatal()
        assert r.entries[0].path == ContextPath.new("yaml", "local")

    def test_str(self):
        r = Report()
        r.add_on_error(ContextPath.new("yaml", "storage", "trees", 0), "bad tree")
        assert str(r) == "error at $.storage.trees[0]: bad tree"
