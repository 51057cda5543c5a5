import json
import os
import tempfile
import unittest

from textnav import config


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_file_gives_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            cfg = config.load_config(os.path.join(tmp, "nope.json"))
        self.assertEqual(cfg, config.DEFAULT_CONFIG)
        self.assertIsNot(cfg, config.DEFAULT_CONFIG)

    def test_known_keys_override_and_unknown_ignored(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "config.json")
            with open(path, "w") as f:
                json.dump({"SCROLL_STEP": 9, "BOGUS": 1}, f)

            cfg = config.load_config(path)

        self.assertEqual(cfg["SCROLL_STEP"], 9)
        self.assertEqual(cfg["TIMEOUT"], 30)
        self.assertNotIn("BOGUS", cfg)

    def test_malformed_file_gives_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "config.json")
            with open(path, "w") as f:
                f.write("[1, 2")
            self.assertEqual(config.load_config(path), config.DEFAULT_CONFIG)

            with open(path, "w") as f:
                f.write("[1, 2]")
            self.assertEqual(config.load_config(path), config.DEFAULT_CONFIG)

    def test_save_then_load(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "config.json")
            cfg = config.DEFAULT_CONFIG.copy()
            cfg["COLOR_THEME"] = "night"
            config.save_config(cfg, path)

            self.assertEqual(config.load_config(path)["COLOR_THEME"], "night")

    def test_save_failure_is_not_raised(self):
        with tempfile.TemporaryDirectory() as tmp:
            config.save_config(config.DEFAULT_CONFIG, os.path.join(tmp, "missing", "config.json"))


if __name__ == "__main__":
    unittest.main()
