import os
import unittest
from unittest import mock

from subjct_mcp.config import API_BASE_URL, SubjctConfig


class TestSubjctConfig(unittest.TestCase):

    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            config = SubjctConfig.from_env()
        self.assertEqual(config.base_url, API_BASE_URL)
        self.assertIsNone(config.api_key)
        self.assertIsNone(config.secret_key)
        self.assertEqual(config.timeout, 30.0)
        self.assertEqual(config.argument_defaults, {})

    def test_reads_environment(self):
        env = {
            "SUBJCT_API_BASE_URL": "http://localhost:9000",
            "SUBJCT_API_KEY": "key",
            "SUBJCT_SECRET_KEY": "secret",
            "SUBJCT_ORGANISATION_ID": "org1",
            "SUBJCT_PROPERTY_ID": "prop1",
            "SUBJCT_TIMEOUT": "5",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            config = SubjctConfig.from_env()
        self.assertEqual(config.base_url, "http://localhost:9000")
        self.assertEqual(config.api_key, "key")
        self.assertEqual(config.secret_key, "secret")
        self.assertEqual(config.timeout, 5.0)
        self.assertEqual(config.argument_defaults, {"organisationId": "org1", "propertyId": "prop1"})

    def test_empty_values_are_unset(self):
        with mock.patch.dict(os.environ, {"SUBJCT_API_KEY": "", "SUBJCT_API_BASE_URL": ""}, clear=True):
            config = SubjctConfig.from_env()
        self.assertIsNone(config.api_key)
        self.assertEqual(config.base_url, API_BASE_URL)

    def test_invalid_timeout(self):
        with mock.patch.dict(os.environ, {"SUBJCT_TIMEOUT": "soon"}, clear=True):
            with self.assertRaises(ValueError):
                SubjctConfig.from_env()


if __name__ == '__main__':
    unittest.main()
