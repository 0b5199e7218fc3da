from __future__ import annotations

import unittest

from livepager.input.key_registry import KeyComboBinding, KeyComboRegistry, key_token_name


class KeyComboRegistryTests(unittest.TestCase):
    def test_dispatch_passes_key_and_context(self) -> None:
        registry = KeyComboRegistry().register_binding(
            KeyComboBinding(("a", "b"), lambda key, context: (key, context))
        )
        self.assertEqual(registry.dispatch("b", 7), ("b", 7))
        self.assertIsNone(registry.dispatch("c", 7))

    def test_later_bindings_win(self) -> None:
        registry = KeyComboRegistry().register_bindings(
            KeyComboBinding(("x",), lambda _key, _context: "first"),
            KeyComboBinding(("x",), lambda _key, _context: "second"),
        )
        self.assertEqual(registry.dispatch("x", None), "second")

    def test_normalizer_strips_token_arguments(self) -> None:
        registry = KeyComboRegistry(normalize=key_token_name).register_binding(
            KeyComboBinding(("RESIZE",), lambda key, _context: key)
        )
        self.assertEqual(registry.dispatch("RESIZE:80:24", None), "RESIZE:80:24")
        self.assertIsNone(registry.dispatch("RESIZED:80:24", None))

    def test_colon_key_is_not_split(self) -> None:
        self.assertEqual(key_token_name(":"), ":")


if __name__ == "__main__":
    unittest.main()
