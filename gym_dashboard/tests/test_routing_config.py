import json
import os
import tempfile
import unittest
from unittest.mock import patch

from gym_dashboard.config import DEFAULT_CONFIG, load_config, save_config
from gym_dashboard.ui.app import ROUTES
from gym_dashboard.ui.routing import Route, match


class TestRoute(unittest.TestCase):
    def test_parse_and_format(self):
        route = Route.parse("/attendance?tab=inactive&filter=30days")
        self.assertEqual(route.path, "/attendance")
        self.assertEqual(dict(route.params), {"tab": "inactive", "filter": "30days"})
        self.assertEqual(str(route), "/attendance?tab=inactive&filter=30days")

    def test_parse_normalises_path(self):
        self.assertEqual(Route.parse("members/").path, "/members")
        self.assertEqual(Route.parse("").path, "/")
        self.assertEqual(str(Route.parse("/?filter=")), "/")

    def test_with_params_drops_blank_values(self):
        route = Route("/members", {"filter": "paid"}).with_params(filter=None, tab="manage", search="")
        self.assertEqual(dict(route.params), {"tab": "manage"})

    def test_match_captures_segments(self):
        found = match(Route.parse("/members/42/punch-records"), ROUTES)
        self.assertEqual(found, ("/members/<id>/punch-records", {"id": "42"}))
        self.assertEqual(match(Route("/members/42"), ROUTES), ("/members/<id>", {"id": "42"}))
        self.assertIsNone(match(Route("/nowhere"), ROUTES))

    def test_every_page_is_registered(self):
        expected = {
            "/", "/members", "/members/<id>", "/members/<id>/punch-records", "/attendance", "/payments",
            "/expenses", "/partners", "/reports", "/birthdays", "/holidays", "/whatsapp", "/settings",
        }
        self.assertEqual(set(ROUTES), expected)


class TestConfig(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "config.json")
        patcher = patch("gym_dashboard.config.dotenv.load_dotenv")
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self.tmp.cleanup)

    def test_defaults_without_file(self):
        with patch.dict(os.environ, {}, clear=True):
            config = load_config(self.path)
        self.assertEqual(config, DEFAULT_CONFIG)
        self.assertIsNot(config["api"], DEFAULT_CONFIG["api"])

    def test_partial_file_keeps_other_defaults(self):
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"ui": {"per_page": 25}}, f)
        with patch.dict(os.environ, {}, clear=True):
            config = load_config(self.path)
        self.assertEqual(config["ui"]["per_page"], 25)
        self.assertEqual(config["ui"]["search_debounce"], 0.5)
        self.assertEqual(config["query"]["retry"], 1)

    def test_environment_wins(self):
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"api": {"base_url": "http://file"}}, f)
        env = {"GYM_API_BASE_URL": "http://env/api", "GYM_API_TIMEOUT": "3.5"}
        with patch.dict(os.environ, env, clear=True):
            config = load_config(self.path)
        self.assertEqual(config["api"]["base_url"], "http://env/api")
        self.assertEqual(config["api"]["timeout"], 3.5)

    def test_save_then_load(self):
        config = load_config(self.path)
        config["ui"]["per_page"] = 50
        self.assertTrue(save_config(config, self.path))
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(load_config(self.path)["ui"]["per_page"], 50)
