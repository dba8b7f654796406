#!/usr/bin/env python3
"""
Tests for loading completed runs, cached metadata and configuration.
"""

import json
import logging
import os
import sys
import tempfile
import unittest
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent))

from harnessmeta.config import get_config
from harnessmeta.errors import CacheParseError, ConfigurationError, ResultsLoadError
from harnessmeta.harness import load_cached_metadata, load_results, parse_cached_metadata
from harnessmeta.logger import configure_logging, get_logger
from harnessmeta.models import TestRecord
from harnessmeta.renderer import generate_source

TEST_DOCUMENT = """<!DOCTYPE html>
<html>
<head>
<title>Sample test</title>
<script src="/resources/testharness.js"></script>
<script id="test_metadata">
var cached_metadata = {
  "t1": {
    "help": ["h1"]
  }
}
</script>
</head>
<body><div id="log"></div></body>
</html>
"""


class TestLoadResults(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.temp_path = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def write(self, name, content):
        path = self.temp_path / name
        path.write_text(content, encoding='utf-8')
        return path

    def test_yaml_mapping_layout(self):
        path = self.write('results.yaml', """
status: {status: 0, message: null}
tests:
  - name: t1
    status: 0
    properties:
      help: [h1]
      timeout: long
  - name: t2
    properties:
      assert: [a1, a2]
""")
        records, harness_status = load_results(path)

        self.assertEqual(harness_status, {'status': 0, 'message': None})
        self.assertEqual([record.name for record in records], ['t1', 't2'])
        self.assertEqual(records[0].status, 0)
        self.assertEqual(records[0].properties['help'], ['h1'])
        self.assertEqual(records[1].properties, {'assert': ['a1', 'a2']})

    def test_json_list_layout(self):
        path = self.write('results.json', json.dumps([
            {'name': 't1', 'properties': {'help': ['h1']}},
            {'name': 't2'},
        ]))
        records, harness_status = load_results(path)

        self.assertIsNone(harness_status)
        self.assertEqual(records[1], TestRecord('t2', {}))

    def test_empty_file_has_no_tests(self):
        records, harness_status = load_results(self.write('results.yaml', ''))
        self.assertEqual(records, [])
        self.assertIsNone(harness_status)

    def test_missing_file_raises(self):
        with self.assertRaises(ResultsLoadError):
            load_results(self.temp_path / 'missing.yaml')

    def test_malformed_file_raises(self):
        with self.assertRaises(ResultsLoadError):
            load_results(self.write('results.json', '{"tests": ['))

    def test_entry_without_name_raises(self):
        with self.assertRaises(ResultsLoadError) as context:
            load_results(self.write('results.yaml', '- properties: {help: [h1]}\n'))
        self.assertIn('no name', context.exception.message)

    def test_tests_must_be_a_list(self):
        with self.assertRaises(ResultsLoadError):
            load_results(self.write('results.yaml', 'tests: {name: t1}\n'))

    def test_date_like_values_stay_strings(self):
        path = self.write('results.yaml', """
tests:
  - name: t1
    properties:
      author: [2024-01-01]
      help: [2024-01-01 10:00:00]
""")
        tests, _ = load_results(path)
        self.assertEqual(tests[0].properties, {'author': ['2024-01-01'], 'help': ['2024-01-01 10:00:00']})
        self.assertEqual(generate_source({'t1': tests[0].properties}).count('"2024-01-01"'), 1)

    def test_undecodable_file_raises(self):
        path = self.temp_path / 'results.yaml'
        path.write_bytes(b'tests:\n  - name: t\xff1\n')
        with self.assertRaises(ResultsLoadError) as context:
            load_results(path)
        self.assertEqual(context.exception.details['path'], str(path))


class TestCachedMetadata(unittest.TestCase):

    def test_reads_block_from_document(self):
        self.assertEqual(parse_cached_metadata(TEST_DOCUMENT), {'t1': {'help': ['h1']}})

    def test_document_without_block_has_no_cache(self):
        self.assertIsNone(parse_cached_metadata('<html><head></head><body></body></html>'))

    def test_empty_cache_is_present(self):
        self.assertEqual(parse_cached_metadata(generate_source({})), {})

    def test_malformed_literal_raises(self):
        text = '<script id="test_metadata">\nvar cached_metadata = {"t1": \n</script>'
        with self.assertRaises(CacheParseError) as context:
            parse_cached_metadata(text)
        self.assertIn('line', context.exception.details)

    def test_block_without_assignment_raises(self):
        with self.assertRaises(CacheParseError):
            parse_cached_metadata('<script id="test_metadata">\nvar other = {};\n</script>')

    def test_non_object_literal_raises(self):
        with self.assertRaises(CacheParseError):
            parse_cached_metadata('<script id="test_metadata">var cached_metadata = [];</script>')

    def test_sidecar_bare_assignment(self):
        text = 'var cached_metadata = {"t1": {"author": ["someone"]}};\n'
        self.assertIsNone(parse_cached_metadata(text))
        self.assertEqual(parse_cached_metadata(text, sidecar=True), {'t1': {'author': ['someone']}})

    def test_sidecar_takes_precedence_over_document(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            document = Path(temp_dir) / 'test.html'
            document.write_text(TEST_DOCUMENT, encoding='utf-8')
            sidecar = Path(temp_dir) / 'test.metadata.js'
            sidecar.write_text('cached_metadata = {}\n', encoding='utf-8')

            self.assertEqual(load_cached_metadata(document), {'t1': {'help': ['h1']}})
            self.assertEqual(load_cached_metadata(document, sidecar), {})
            self.assertIsNone(load_cached_metadata())

    def test_undecodable_document_raises(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            document = Path(temp_dir) / 'test.html'
            document.write_bytes(b'<script id="test_metadata">\xff</script>')
            with self.assertRaises(ResultsLoadError):
                load_cached_metadata(document)


class TestConfig(unittest.TestCase):

    def setUp(self):
        self.config = get_config()
        self.config.reset()

    def tearDown(self):
        self.config.reset()
        os.environ.pop('HARNESSMETA_SUMMARY_ID', None)

    def test_config_is_a_singleton(self):
        self.assertIs(get_config(), self.config)

    def test_defaults(self):
        self.assertEqual(self.config.summary_id, 'summary')
        self.assertIn(self.config.log_level, ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'))

    def test_environment_and_overrides(self):
        os.environ['HARNESSMETA_SUMMARY_ID'] = 'results'
        self.assertEqual(self.config.summary_id, 'results')
        self.config.set('summary_id', 'footer')
        self.assertEqual(self.config.summary_id, 'footer')

    def test_env_file_is_loaded(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            env_file = Path(temp_dir) / '.env'
            env_file.write_text('HARNESSMETA_SUMMARY_ID=from_env_file\n')
            self.config.set_env_file(str(env_file))
        self.assertEqual(self.config.summary_id, 'from_env_file')

    def test_invalid_log_level_raises(self):
        self.config.update({'log_level': 'loud'})
        with self.assertRaises(ConfigurationError):
            self.config.log_level


class TestLogging(unittest.TestCase):

    def setUp(self):
        get_config().reset()

    def tearDown(self):
        get_config().reset()
        os.environ.pop('HARNESSMETA_LOG_LEVEL', None)

    def test_invalid_level_falls_back_to_info(self):
        os.environ['HARNESSMETA_LOG_LEVEL'] = 'loud'
        logger = get_logger('fallback_level')
        self.assertEqual(logger.handlers[0].level, logging.INFO)

    def test_configure_logging_rejects_invalid_level(self):
        os.environ['HARNESSMETA_LOG_LEVEL'] = 'loud'
        with self.assertRaises(ConfigurationError):
            configure_logging()

    def test_configure_logging_applies_level(self):
        logger = get_logger('configured_level')
        configure_logging('ERROR')
        self.assertEqual(logger.handlers[0].level, logging.ERROR)
        configure_logging('INFO')
        self.assertEqual(logger.handlers[0].level, logging.INFO)

    def test_configure_logging_adds_file_handlers_once(self):
        logger = get_logger('file_output')
        with tempfile.TemporaryDirectory() as temp_dir:
            try:
                configure_logging('INFO', Path(temp_dir))
                configure_logging('INFO', Path(temp_dir))
                file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
                self.assertEqual(len(file_handlers), 1)
                self.assertTrue(list(Path(temp_dir).glob('file_output_*.log')))
            finally:
                for _, other in list(logging.root.manager.loggerDict.items()):
                    if isinstance(other, logging.Logger):
                        for handler in [h for h in other.handlers if isinstance(h, logging.FileHandler)]:
                            other.removeHandler(handler)
                            handler.close()


if __name__ == '__main__':
    unittest.main()
