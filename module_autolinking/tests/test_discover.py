"""Tests for find_modules and revision reduction."""

import json

from module_autolinking.discover import find_modules, reduce_revisions
from module_autolinking.models import ModuleRevision, Platform, SearchConfig, SearchResult


def _dump(results):
    return json.dumps({name: r.model_dump() for name, r in results.items()})


class TestReduceRevisions:
    def test_first_is_canonical(self):
        revisions = {
            "pkg": [
                ModuleRevision(path="/a", version="1.0.0"),
                ModuleRevision(path="/b", version="2.0.0"),
                ModuleRevision(path="/c", version="0.1.0"),
            ],
        }
        result = reduce_revisions(revisions)["pkg"]
        assert (result.path, result.version) == ("/a", "1.0.0")
        assert [d.path for d in result.duplicates] == ["/b", "/c"]

    def test_single_revision_has_no_duplicates(self):
        result = reduce_revisions({"pkg": [ModuleRevision(path="/a", version="1.0.0")]})
        assert result == {"pkg": SearchResult(path="/a", version="1.0.0", duplicates=[])}

    def test_empty_lists_dropped(self):
        assert reduce_revisions({"pkg": []}) == {}

    def test_keeps_module_order(self):
        revisions = {
            "b": [ModuleRevision(path="/b", version="1")],
            "a": [ModuleRevision(path="/a", version="1")],
        }
        assert list(reduce_revisions(revisions)) == ["b", "a"]


class TestFindModules:
    def _nested_duplicate(self, workspace, make_module, platforms=("ios",)):
        nm = workspace / "node_modules"
        root_copy = make_module(nm / "pkg-a", "pkg-a", "1.0.0", platforms)
        nested_copy = make_module(nm / "nested" / "node_modules" / "pkg-a", "pkg-a", "1.0.1", platforms)
        return root_copy, nested_copy

    def test_nested_duplicate(self, workspace, make_module):
        root_copy, nested_copy = self._nested_duplicate(workspace, make_module)

        results = find_modules(Platform.IOS, SearchConfig(search_paths=["node_modules"]), cwd=workspace)
        assert {name: r.model_dump() for name, r in results.items()} == {
            "pkg-a": {
                "path": str(root_copy),
                "version": "1.0.0",
                "duplicates": [{"path": str(nested_copy), "version": "1.0.1"}],
            },
        }

    def test_excluded_module_absent(self, workspace, make_module):
        self._nested_duplicate(workspace, make_module)

        provided = SearchConfig(search_paths=["node_modules"], exclude=["pkg-a"])
        assert find_modules(Platform.IOS, provided, cwd=workspace) == {}

    def test_unsupported_platform_absent(self, workspace, make_module):
        self._nested_duplicate(workspace, make_module, platforms=("android",))

        provided = SearchConfig(search_paths=["node_modules"])
        assert find_modules(Platform.IOS, provided, cwd=workspace) == {}
        assert "pkg-a" in find_modules(Platform.ANDROID, provided, cwd=workspace)

    def test_dot_directory_copy_is_not_a_duplicate(self, workspace, make_module):
        nm = workspace / "node_modules"
        root_copy = make_module(nm / "pkg-a", "pkg-a", "1.0.0", ("ios",))
        make_module(nm / ".cache" / "pkg-a", "pkg-a", "0.9.0", ("ios",))

        result = find_modules(Platform.IOS, SearchConfig(search_paths=["node_modules"]), cwd=workspace)["pkg-a"]
        assert result.path == str(root_copy)
        assert result.duplicates == []

    def test_default_search_paths(self, workspace, make_module):
        root_copy, nested_copy = self._nested_duplicate(workspace, make_module)

        results = find_modules(Platform.IOS, cwd=workspace)
        assert results["pkg-a"].path == str(root_copy)

    def test_monorepo_prefers_app_node_modules(self, workspace, make_module):
        app = workspace / "apps" / "mobile"
        app.mkdir(parents=True)
        (app / "package.json").write_text(json.dumps({"name": "mobile"}))
        app_copy = make_module(app / "node_modules" / "pkg", "pkg", "2.0.0")
        root_copy = make_module(workspace / "node_modules" / "pkg", "pkg", "1.0.0")

        result = find_modules(Platform.IOS, cwd=app)["pkg"]
        assert result.path == str(app_copy)
        assert [d.path for d in result.duplicates] == [str(root_copy)]

    def test_package_json_config_applies(self, workspace, make_module):
        (workspace / "package.json").write_text(json.dumps({
            "name": "app",
            "expoModules": {"ios": {"exclude": ["pkg-a"]}},
        }))
        self._nested_duplicate(workspace, make_module)

        assert find_modules(Platform.IOS, cwd=workspace) == {}

    def test_idempotent(self, workspace, make_module):
        self._nested_duplicate(workspace, make_module)
        make_module(workspace / "node_modules" / "other", "other", "3.0.0", ("ios",))

        first = find_modules(Platform.IOS, cwd=workspace)
        second = find_modules(Platform.IOS, cwd=workspace)
        assert _dump(first) == _dump(second)
