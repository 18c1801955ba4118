#!/usr/bin/env python3
import json
import os
import tempfile
import unittest

from gitlabbot.config import load_config
from gitlabbot.errors import ConfigError

SAMPLE = {
    "BotUsername": "GitLab",
    "BotChannel": "gitlabbot",
    "BotIcon": ":robot_face:",
    "PushIcon": ":arrow_up:",
    "MergeIcon": ":twisted_rightwards_arrows:",
    "BuildIcon": ":construction_worker:",
    "BotStartMessage": "started",
    "SlackAPIUrl": "https://hooks.slack.test/services/T/B/X",
    "SlackAPIToken": "xoxp-test",
    "ChannelPrefix": "dev-",
    "Verbose": True,
    "HttpTimeout": 5,
    "Redirect": [
        {"Channel": "ops", "Repositories": ["infra", "ansible"]},
        {"Channel": "front", "Repositories": ["web"]},
    ],
}


class TestLoadConfig(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, 'config.json')

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, content):
        with open(self.path, 'w', encoding='utf-8') as fp:
            fp.write(content if isinstance(content, str) else json.dumps(content))

    def test_loads_original_format(self):
        self._write(SAMPLE)
        config = load_config(self.path)
        self.assertEqual(config.bot_username, 'GitLab')
        self.assertEqual(config.slack_api_url, 'https://hooks.slack.test/services/T/B/X')
        self.assertEqual(config.slack_api_token, 'xoxp-test')
        self.assertEqual(config.http_timeout, 5)
        self.assertTrue(config.verbose)
        self.assertEqual(len(config.redirect), 2)
        self.assertEqual(config.redirect[0].repositories, ('infra', 'ansible'))

    def test_defaults(self):
        self._write(SAMPLE)
        config = load_config(self.path)
        self.assertEqual(config.slack_api_base, 'https://slack.com/api')
        self.assertEqual((config.push_port, config.merge_port, config.build_port), (8100, 8200, 8300))
        self.assertTrue(config.self_report_errors)
        self.assertFalse(config.dedup_per_repository)

    def test_redirect_for_first_rule(self):
        self._write(SAMPLE)
        config = load_config(self.path)
        self.assertEqual(config.redirect_for('ansible'), 'ops')
        self.assertEqual(config.redirect_for('web'), 'front')
        self.assertIsNone(config.redirect_for('demo'))

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            load_config(os.path.join(self.tmpdir.name, 'nope.json'))

    def test_invalid_json(self):
        self._write('{"BotUsername": ')
        with self.assertRaises(ConfigError):
            load_config(self.path)

    def test_missing_required_field(self):
        data = dict(SAMPLE)
        del data['SlackAPIToken']
        self._write(data)
        with self.assertRaises(ConfigError):
            load_config(self.path)

    def test_invalid_timeout(self):
        data = dict(SAMPLE, HttpTimeout=0)
        self._write(data)
        with self.assertRaises(ConfigError):
            load_config(self.path)

    def test_empty_system_channel(self):
        data = dict(SAMPLE, BotChannel=' ')
        self._write(data)
        with self.assertRaises(ConfigError):
            load_config(self.path)


if __name__ == '__main__':
    unittest.main()
