import json
import os
import tempfile
import unittest
from unittest import mock

from tzclip import config
from tzclip.timeparser import TimeParser


class TestConfig(unittest.TestCase):
    def setUp(self):
        """Set up test environment"""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_file = os.path.join(self.temp_dir.name, 'config.json')

    def tearDown(self):
        self.temp_dir.cleanup()

    def write_config(self, content):
        with open(self.config_file, 'w') as f:
            f.write(content)

    def test_missing_or_broken_file(self):
        self.assertEqual(config.load_config(self.config_file), {})

        self.write_config('{not json')
        self.assertEqual(config.load_config(self.config_file), {})

        self.write_config('[1, 2]')
        self.assertEqual(config.load_config(self.config_file), {})

    def test_config_file_from_environment(self):
        self.write_config(json.dumps({'testing_mode': True}))
        with mock.patch.dict(os.environ, {'TZCLIP_CONFIG': self.config_file}):
            self.assertEqual(config.get_config_file(), self.config_file)
            self.assertTrue(config.get_testing_mode())

    def test_testing_mode(self):
        self.assertFalse(config.get_testing_mode({}))
        self.assertTrue(config.get_testing_mode({'testing_mode': True}))

    def test_timezone_map_overrides(self):
        table = config.get_timezone_map({
            'timezone_map': {'hst': 'Pacific/Honolulu', 'IST': 'Asia/Jerusalem'},
        })
        self.assertEqual(table['HST'], 'Pacific/Honolulu')
        self.assertEqual(table['IST'], 'Asia/Jerusalem')
        self.assertEqual(table['EST'], 'America/New_York')
        # Defaults are left alone
        self.assertEqual(config.DEFAULT_TIMEZONE_MAP['IST'], 'Asia/Kolkata')

    def test_offset_map_overrides(self):
        table = config.get_offset_map({'offset_map': {'nzst': '43200'}})
        self.assertEqual(table['NZST'], 43200)
        self.assertEqual(list(table)[-1], 'NZST')
        self.assertEqual(table['PST'], -8 * 3600)

    def test_bad_overrides_are_skipped(self):
        table = config.get_offset_map({'offset_map': {
            'NZST': 'twelve', 'CHST': True, 'WAT': None, 'SST': '-39600', 7: 3600,
        }})
        self.assertEqual(table['SST'], -39600)
        for key in ('NZST', 'CHST', 'WAT', '7'):
            with self.subTest(key=key):
                self.assertNotIn(key, table)
        self.assertEqual(table['PST'], -8 * 3600)

        table = config.get_timezone_map({'timezone_map': {
            'XYZ': 5, 'ABC': '', 'HST': 'Pacific/Honolulu', 'NUL': None,
        }})
        self.assertEqual(table['HST'], 'Pacific/Honolulu')
        for key in ('XYZ', 'ABC', 'NUL'):
            with self.subTest(key=key):
                self.assertNotIn(key, table)

    def test_tables_that_are_not_objects(self):
        for overrides in (['EST', 'UTC'], 'EST=UTC', 42):
            with self.subTest(overrides=overrides):
                self.assertEqual(dict(config.get_timezone_map({'timezone_map': overrides})),
                                 dict(config.DEFAULT_TIMEZONE_MAP))
                self.assertEqual(dict(config.get_offset_map({'offset_map': overrides})),
                                 dict(config.DEFAULT_OFFSET_MAP))

    def test_bad_config_file_still_converts(self):
        self.write_config(json.dumps({
            'timezone_map': {'XYZ': 5, 'EST': ['America/New_York']},
            'offset_map': {'NZST': 'twelve'},
        }))
        with mock.patch.dict(os.environ, {'TZCLIP_CONFIG': self.config_file}):
            parser = TimeParser()

        result = parser.extract_and_convert('9PM XYZ', 'UTC')
        self.assertEqual(result.converted_label, '9:00 PM')
        self.assertEqual(parser.converter.source_zone_name('EST'), 'America/New_York')
        self.assertEqual(parser.detect_zone_offset('call at 3pm PST'), -8 * 3600)

        self.write_config(json.dumps({'timezone_map': ['EST']}))
        with mock.patch.dict(os.environ, {'TZCLIP_CONFIG': self.config_file}):
            parser = TimeParser()
        self.assertIsNotNone(parser.extract_and_convert('9PM EST', 'UTC'))

    def test_tables_are_read_only(self):
        with self.assertRaises(TypeError):
            config.DEFAULT_TIMEZONE_MAP['EST'] = 'UTC'
        with self.assertRaises(TypeError):
            config.get_offset_map({})['EST'] = 0

    def test_longer_abbreviations_come_first(self):
        keys = list(config.DEFAULT_OFFSET_MAP)
        for i, shorter in enumerate(keys):
            for longer in keys[i + 1:]:
                with self.subTest(shorter=shorter, longer=longer):
                    self.assertNotIn(shorter, longer)


if __name__ == '__main__':
    unittest.main()
