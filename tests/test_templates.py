import json
import unittest

from extension_scaffold.scaffold import package_name
from extension_scaffold.templates import (
    default_manifest,
    icon_png,
    render_app_tsx,
    render_index_html,
    render_manifest,
    render_popup_html,
    render_tsconfig,
)


class TestTemplates(unittest.TestCase):
    def test_manifest_defaults(self):
        manifest = json.loads(render_manifest("My Ext"))
        self.assertEqual(manifest["manifest_version"], 3)
        self.assertEqual(manifest["action"]["default_popup"], "index.html")
        self.assertEqual(manifest["name"], "My Ext")
        self.assertEqual(manifest, default_manifest("My Ext"))

    def test_icon_is_a_png(self):
        self.assertTrue(icon_png().startswith(b"\x89PNG\r\n\x1a\n"))

    def test_html_entries_point_at_their_scripts(self):
        self.assertIn('src="/src/main.tsx"', render_index_html("x"))
        self.assertIn('src="/src/popup.tsx"', render_popup_html("x"))
        self.assertIn("<title>a &amp; b</title>", render_index_html("a & b"))

    def test_app_title_is_escaped(self):
        self.assertIn("{'it\\'s'}", render_app_tsx("it's"))

    def test_tsconfig_uses_react_jsx(self):
        cfg = json.loads(render_tsconfig())
        self.assertEqual(cfg["compilerOptions"]["jsx"], "react-jsx")
        self.assertEqual(cfg["include"], ["src"])

    def test_package_name(self):
        self.assertEqual(package_name("My Cool  Extension!"), "my-cool-extension")
        self.assertEqual(package_name("---"), "extension")

    def test_rendering_is_deterministic(self):
        self.assertEqual(render_manifest("a"), render_manifest("a"))
        self.assertEqual(render_index_html("a"), render_index_html("a"))


if __name__ == "__main__":
    unittest.main()
