"""Unit tests for hook specifications."""

import pluggy

from docengine_mcp.hooks import PROJECT_NAME, DocEngineMCPHookSpec, hookimpl
from docengine_mcp.plugin import PluginMetadata

HOOK_NAMES = [
    "docengine_get_plugin_metadata",
    "docengine_register_tools",
    "docengine_register_resources",
    "docengine_health_check",
]


def _metadata(name: str) -> PluginMetadata:
    return PluginMetadata(
        name=name,
        version="1.0.0",
        description=f"Plugin {name}",
        maintainer="test@example.com",
    )


class TestHookSpec:
    """Tests for DocEngineMCPHookSpec."""

    def test_project_name_defined(self) -> None:
        """Verify project name is defined correctly."""
        assert PROJECT_NAME == "docengine_mcp"

    def test_hookspec_has_required_methods(self) -> None:
        """Verify hookspec defines all required hook methods."""
        spec = DocEngineMCPHookSpec()

        for name in HOOK_NAMES:
            assert hasattr(spec, name)

    def test_hookspec_can_be_added_to_pluggy(self) -> None:
        """Verify hookspec can be registered with pluggy."""
        pm = pluggy.PluginManager(PROJECT_NAME)
        pm.add_hookspecs(DocEngineMCPHookSpec)

        for name in HOOK_NAMES:
            assert hasattr(pm.hook, name)


class TestHookImpl:
    """Tests for hook implementations."""

    def test_hookimpl_decorator_works(self) -> None:
        """Verify hookimpl decorator marks methods for pluggy."""

        class TestPlugin:
            @hookimpl
            def docengine_get_plugin_metadata(self) -> PluginMetadata:
                return _metadata("test")

        plugin = TestPlugin()
        assert hasattr(plugin.docengine_get_plugin_metadata, "docengine_mcp_impl")

    def test_multiple_plugins_can_register(self) -> None:
        """Verify multiple plugins can be registered and hooks called."""

        class PluginA:
            @hookimpl
            def docengine_get_plugin_metadata(self) -> PluginMetadata:
                return _metadata("plugin_a")

        class PluginB:
            @hookimpl
            def docengine_get_plugin_metadata(self) -> PluginMetadata:
                return _metadata("plugin_b")

        pm = pluggy.PluginManager(PROJECT_NAME)
        pm.add_hookspecs(DocEngineMCPHookSpec)
        pm.register(PluginA())
        pm.register(PluginB())

        results = pm.hook.docengine_get_plugin_metadata()
        assert {r.name for r in results} == {"plugin_a", "plugin_b"}

    def test_register_tools_hook_receives_arguments(self) -> None:
        """Verify register_tools passes mcp and server through."""
        received = []

        class TestPlugin:
            @hookimpl
            def docengine_register_tools(self, mcp, server) -> None:
                received.append((mcp, server))

        pm = pluggy.PluginManager(PROJECT_NAME)
        pm.add_hookspecs(DocEngineMCPHookSpec)
        pm.register(TestPlugin())

        pm.hook.docengine_register_tools(mcp="mcp", server="server")

        assert received == [("mcp", "server")]
